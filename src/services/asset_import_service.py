"""
Asset bulk import.

Assets are identified by their asset tag. Each row names a catalog item
and its item category; unknown items and categories are created before
rows are processed, with each new item filed under the category the batch
most often pairs it with. A row may hand the asset to an employee by
employee code.
"""

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from src.models import Asset, AssetStatus, EmployeeAsset, Item, ItemCategory, Project, normalize_name
from src.utils.constants import DEFAULT_ASSET_CONDITION, SERIAL_PLACEHOLDERS

from .database import session_scope
from .exceptions import RowValidationError
from .import_context import ImportContext
from .import_result import ImportResult
from .import_rows import AssetImportRow
from .logging_utils import get_service_logger, log_operation
from .reference_catalog import ParentLink, ReferenceField, extend_reference_catalogs
from .row_processor import clean_optional, clean_text, natural_key, process_rows, require, resolve_reference
from .upsert_stager import ActiveAssignments, UpsertStager, commit_staged, load_assignment_targets

logger = get_service_logger(__name__)

FLOW = "asset"
ERROR_PREFIX = "Error processing asset"

ITEM_CATEGORY_FIELD = ReferenceField("item_category_name", ItemCategory, "item_category_id")
ITEM_FIELD = ReferenceField(
    "item_name",
    Item,
    "item_id",
    parent=ParentLink("item_category_name", ItemCategory, "item_category_id"),
)
ASSET_REFERENCE_FIELDS = (ITEM_CATEGORY_FIELD, ITEM_FIELD)


def describe_asset(item_name: str, serial_number: Optional[str]) -> str:
    """
    Description written on imported assets.

    Example:
        >>> describe_asset("Latitude 5440", "SN-1")
        'Imported: Latitude 5440 (SN-1)'
    """
    if serial_number:
        return f"Imported: {item_name} ({serial_number})"
    return f"Imported: {item_name}"


def _asset_key(row: AssetImportRow) -> Optional[str]:
    return natural_key(row.asset_tag)


def _duplicate_message(row: AssetImportRow) -> str:
    return f"Duplicate Asset Tag '{clean_text(row.asset_tag)}' found in import data"


class _AssetRowStager:
    """Stages asset rows; tracks serial numbers so two tags never share one.

    serial_owners maps a normalized serial to the tag holding it, and
    current_serials maps each tag to the serial it holds now.
    """

    def __init__(self, project_id: Optional[str], targets, active: ActiveAssignments, assets: Iterable[Asset]):
        self.project_id = project_id
        self.targets = targets
        self.active = active
        self.serial_owners: Dict[str, str] = {
            normalize_name(asset.serial_number): normalize_name(asset.asset_tag)
            for asset in assets
            if asset.serial_number
        }
        self.current_serials: Dict[str, str] = {
            tag: serial for serial, tag in self.serial_owners.items()
        }

    def __call__(self, context: ImportContext, row: AssetImportRow, row_number: int) -> None:
        asset_tag = require(row, "asset_tag", "Asset Tag")
        asset_name = require(row, "asset_name", "Asset Name")
        require(row, "item_category_name", "Item Category")
        item_name = require(row, "item_name", "Item")

        key = normalize_name(asset_tag)
        serial_number = clean_optional(row.serial_no, SERIAL_PLACEHOLDERS)
        if serial_number:
            owner = self.serial_owners.get(normalize_name(serial_number))
            if owner is not None and owner != key:
                raise RowValidationError(f"Serial Number '{serial_number}' is already used by another asset")

        values = {
            "name": asset_name,
            "description": describe_asset(item_name, serial_number),
            "serial_number": serial_number,
            "condition": clean_text(row.condition) or DEFAULT_ASSET_CONDITION,
            "item_id": resolve_reference(context, ITEM_FIELD, row),
        }
        if self.project_id is not None:
            values["project_id"] = self.project_id

        employee = self.targets.get(natural_key(row.assigned_to))
        if employee is not None and employee.is_active:
            values["status"] = AssetStatus.ASSIGNED
        else:
            employee = None

        asset, _ = context.stager.stage(
            context,
            key,
            values,
            create_values={"asset_tag": asset_tag, "status": AssetStatus.AVAILABLE},
        )
        self._claim_serial(key, serial_number)

        if employee is not None and not self.active.is_assigned(employee.id, asset.id):
            assignment = EmployeeAsset(employee_id=employee.id, asset_id=asset.id)
            assignment.assigned_date = context.started_at
            assignment.mark_created(context.actor, context.started_at)
            context.stager.stage_association(assignment)
            self.active.add(employee.id, asset.id)

    def _claim_serial(self, key: str, serial_number: Optional[str]) -> None:
        """Move the tag to its new serial, freeing the one it held before."""
        previous = self.current_serials.pop(key, None)
        if previous is not None and self.serial_owners.get(previous) == key:
            del self.serial_owners[previous]
        if serial_number:
            normalized = normalize_name(serial_number)
            self.serial_owners[normalized] = key
            self.current_serials[key] = normalized


def import_assets(
    rows: Iterable[Any],
    project_id: Optional[str] = None,
    actor: Optional[str] = None,
    session: Optional[Session] = None,
) -> ImportResult:
    """
    Import asset rows.

    Args:
        rows: AssetImportRow instances or dicts
        project_id: Optional id of the project every asset is imported into
        actor: Recorded as created_by/updated_by (config default if None)
        session: Optional session; a new one is opened if None

    Returns:
        ImportResult; an unknown project yields a single error at row 0

    Raises:
        CatalogExtensionError: New items or categories could not be saved
        EntityCommitError: Asset records could not be saved
        AssociationCommitError: Assignments could not be saved
    """
    if session is not None:
        return _import_assets_impl(rows, project_id, actor, session)
    with session_scope() as session:
        return _import_assets_impl(rows, project_id, actor, session)


def _import_assets_impl(
    rows: Iterable[Any], project_id: Optional[str], actor: Optional[str], session: Session
) -> ImportResult:
    """Implementation of import_assets."""
    import_rows: List[AssetImportRow] = [AssetImportRow.coerce(row) for row in rows]
    context = ImportContext.begin(session, FLOW, actor)

    if project_id is not None and session.get(Project, project_id) is None:
        context.result.add_error(0, f"Project with ID '{project_id}' not found.")
        logger.warning(f"Asset import rejected: project {project_id} not found")
        return context.result

    extend_reference_catalogs(context, import_rows, ASSET_REFERENCE_FIELDS)

    existing_assets = session.query(Asset).all()
    context.stager = UpsertStager(
        Asset, existing_assets, key_of=lambda asset: normalize_name(asset.asset_tag), entity_label=FLOW
    )
    stage_row = _AssetRowStager(
        project_id,
        targets=load_assignment_targets(session),
        active=ActiveAssignments.load(session, EmployeeAsset, "asset_id"),
        assets=existing_assets,
    )
    process_rows(
        context,
        import_rows,
        key_of=_asset_key,
        duplicate_message=_duplicate_message,
        stage_row=stage_row,
        error_prefix=ERROR_PREFIX,
    )
    commit_staged(context)

    result = context.result
    log_operation(
        logger,
        operation="import_assets",
        outcome="success" if result.success else "partial",
        flow=FLOW,
        created_count=result.created_count,
        updated_count=result.updated_count,
        failed=len(result.errors),
    )
    return result
