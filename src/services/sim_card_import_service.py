"""
SIM card bulk import.

A SIM card is identified by its account number together with its service
number. Rows name their SIM type, provider and plan by display name
(auto-created when unknown) and may name the employee code the card is
handed to. Cards can be imported into a target project chosen by id.
"""

from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import Session

from src.models import (
    EmployeeSimCard,
    Project,
    SimCard,
    SimCardPlan,
    SimCardStatus,
    SimProvider,
    SimType,
)
from src.utils.datetime_utils import parse_import_date

from .database import session_scope
from .import_context import ImportContext
from .import_result import ImportResult
from .import_rows import SimCardImportRow
from .logging_utils import get_service_logger, log_operation
from .reference_catalog import ReferenceField, extend_reference_catalogs
from .row_processor import clean_text, natural_key, process_rows, require, resolve_references
from .upsert_stager import ActiveAssignments, UpsertStager, commit_staged, load_assignment_targets

logger = get_service_logger(__name__)

FLOW = "SIM card"
ERROR_PREFIX = "Error processing SIM card"

SIM_REFERENCE_FIELDS = (
    ReferenceField("sim_type_name", SimType, "sim_type_id"),
    ReferenceField("sim_provider_name", SimProvider, "sim_provider_id"),
    ReferenceField("sim_card_plan_name", SimCardPlan, "sim_card_plan_id"),
)


def _sim_key(row: SimCardImportRow) -> Optional[str]:
    return natural_key(row.sim_account_no, row.sim_service_no)


def _duplicate_message(row: SimCardImportRow) -> str:
    return (
        f"Duplicate SIM card combination (Account: '{clean_text(row.sim_account_no)}', "
        f"Service: '{clean_text(row.sim_service_no)}') found in import data"
    )


class _SimCardRowStager:
    """Stages SIM card rows against a target project and assignment snapshots."""

    def __init__(self, project_id: Optional[str], targets, active: ActiveAssignments):
        self.project_id = project_id
        self.targets = targets
        self.active = active

    def __call__(self, context: ImportContext, row: SimCardImportRow, row_number: int) -> None:
        account_no = require(
            row, "sim_account_no", "SIM Account Number",
            message="SIM Account Number is required for unique identification.",
        )
        service_no = require(
            row, "sim_service_no", "SIM Service Number",
            message="SIM Service Number is required for unique identification.",
        )

        values = {
            "sim_start_date": parse_import_date(row.sim_start_date),
            "sim_serial_no": clean_text(row.sim_serial_no),
            "sim_status": SimCardStatus.parse(row.sim_status),
            **resolve_references(context, SIM_REFERENCE_FIELDS, row),
        }
        if self.project_id is not None:
            values["project_id"] = self.project_id

        employee = self.targets.get(natural_key(row.assigned_to))
        if employee is not None and employee.is_active:
            values["assigned_to"] = employee.id
        else:
            employee = None

        sim_card, _ = context.stager.stage(
            context,
            natural_key(account_no, service_no),
            values,
            create_values={"sim_account_no": account_no, "sim_service_no": service_no},
        )

        if employee is not None and not self.active.is_assigned(employee.id, sim_card.id):
            assignment = EmployeeSimCard(employee_id=employee.id, sim_card_id=sim_card.id)
            assignment.assigned_date = context.started_at
            assignment.mark_created(context.actor, context.started_at)
            context.stager.stage_association(assignment)
            self.active.add(employee.id, sim_card.id)


def import_sim_cards(
    rows: Iterable[Any],
    project_id: Optional[str] = None,
    actor: Optional[str] = None,
    session: Optional[Session] = None,
) -> ImportResult:
    """
    Import SIM card rows.

    Args:
        rows: SimCardImportRow instances or dicts
        project_id: Optional id of the project every card is imported into
        actor: Recorded as created_by/updated_by (config default if None)
        session: Optional session; a new one is opened if None

    Returns:
        ImportResult; an empty batch or unknown project yields a single
        error at row 0 and no writes

    Raises:
        CatalogExtensionError: New SIM master data could not be saved
        EntityCommitError: SIM card records could not be saved
        AssociationCommitError: Assignments could not be saved
    """
    if session is not None:
        return _import_sim_cards_impl(rows, project_id, actor, session)
    with session_scope() as session:
        return _import_sim_cards_impl(rows, project_id, actor, session)


def _import_sim_cards_impl(
    rows: Iterable[Any], project_id: Optional[str], actor: Optional[str], session: Session
) -> ImportResult:
    """Implementation of import_sim_cards."""
    import_rows: List[SimCardImportRow] = [SimCardImportRow.coerce(row) for row in rows]
    context = ImportContext.begin(session, FLOW, actor)

    if not import_rows:
        context.result.add_error(0, "No SIM cards provided for import.")
        return context.result

    if project_id is not None and session.get(Project, project_id) is None:
        context.result.add_error(0, f"Project with ID '{project_id}' not found.")
        logger.warning(f"SIM card import rejected: project {project_id} not found")
        return context.result

    extend_reference_catalogs(context, import_rows, SIM_REFERENCE_FIELDS)

    context.stager = UpsertStager.load(
        session,
        SimCard,
        key_of=lambda sim_card: natural_key(sim_card.sim_account_no, sim_card.sim_service_no),
        entity_label=FLOW,
    )
    stage_row = _SimCardRowStager(
        project_id,
        targets=load_assignment_targets(session),
        active=ActiveAssignments.load(session, EmployeeSimCard, "sim_card_id"),
    )
    process_rows(
        context,
        import_rows,
        key_of=_sim_key,
        duplicate_message=_duplicate_message,
        stage_row=stage_row,
        error_prefix=ERROR_PREFIX,
    )
    commit_staged(context)

    result = context.result
    log_operation(
        logger,
        operation="import_sim_cards",
        outcome="success" if result.success else "partial",
        flow=FLOW,
        created_count=result.created_count,
        updated_count=result.updated_count,
        failed=len(result.errors),
    )
    return result
