"""
Employee bulk import.

Imports spreadsheet rows describing employees. Each row names its
organizational master data (department, sub-department, company, project,
nationality, category, position, cost center) by display name; names the
store does not know yet are created first, then every row is upserted by
its employee code.

Usage:
    from src.services.employee_import_service import import_employees

    result = import_employees(
        [{"EmployeeId": "E1", "FirstName": "Ana", "LastName": "Silva",
          "DepartmentName": "Finance"}],
        actor="hr.admin",
    )
    print(result.get_summary())
"""

from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import Session

from src.models import (
    Company,
    CostCenter,
    Department,
    Employee,
    EmployeeCategory,
    EmployeePosition,
    Nationality,
    Project,
    Status,
    SubDepartment,
    normalize_name,
)
from src.utils.constants import CONTACT_PLACEHOLDERS, PROJECT_CODE_PREFIX

from .database import session_scope
from .exceptions import RowValidationError
from .import_context import ImportContext
from .import_result import ImportResult
from .import_rows import EmployeeImportRow
from .logging_utils import get_service_logger, log_operation
from .reference_catalog import ParentLink, ReferenceField, extend_reference_catalogs
from .row_processor import (
    clean_optional,
    clean_text,
    natural_key,
    process_rows,
    require,
    resolve_references,
)
from .upsert_stager import UpsertStager, commit_staged

logger = get_service_logger(__name__)

FLOW = "employee"
ERROR_PREFIX = "Unexpected error"

# Parents are listed before their children
EMPLOYEE_REFERENCE_FIELDS = (
    ReferenceField("department_name", Department, "department_id"),
    ReferenceField(
        "sub_department_name",
        SubDepartment,
        "sub_department_id",
        parent=ParentLink("department_name", Department, "department_id"),
    ),
    ReferenceField("company_name", Company, "company_id"),
    ReferenceField("project_name", Project, "project_id", code_prefix=PROJECT_CODE_PREFIX),
    ReferenceField("nationality_name", Nationality, "nationality_id"),
    ReferenceField("employee_category_name", EmployeeCategory, "employee_category_id"),
    ReferenceField("employee_position_name", EmployeePosition, "employee_position_id"),
    ReferenceField("cost_center_name", CostCenter, "cost_center_id"),
)


def _employee_key(row: EmployeeImportRow) -> Optional[str]:
    return natural_key(row.employee_id)


def _duplicate_message(row: EmployeeImportRow) -> str:
    return f"Duplicate Employee ID '{clean_text(row.employee_id)}' found in import data"


def _stage_employee_row(context: ImportContext, row: EmployeeImportRow, row_number: int) -> None:
    employee_code = require(row, "employee_id", "Employee ID")
    first_name = require(row, "first_name", "First Name")
    last_name = require(row, "last_name", "Last Name")

    try:
        status = Status.parse(row.status)
    except ValueError as e:
        raise RowValidationError(f"Invalid status '{clean_text(row.status)}'") from e

    values = {
        "first_name": first_name,
        "last_name": last_name,
        "email": clean_optional(row.email, CONTACT_PLACEHOLDERS),
        "phone": clean_optional(row.phone, CONTACT_PLACEHOLDERS),
        **resolve_references(context, EMPLOYEE_REFERENCE_FIELDS, row),
    }
    # A blank status keeps the stored one
    if status is not None:
        values["status"] = status

    context.stager.stage(
        context,
        normalize_name(employee_code),
        values,
        create_values={"employee_id": employee_code, "status": Status.ACTIVE},
    )


def import_employees(
    rows: Iterable[Any],
    actor: Optional[str] = None,
    session: Optional[Session] = None,
) -> ImportResult:
    """
    Import employee rows.

    Args:
        rows: EmployeeImportRow instances or dicts
        actor: Recorded as created_by/updated_by (config default if None)
        session: Optional session; a new one is opened if None

    Returns:
        ImportResult with created/updated counts and per-row errors

    Raises:
        CatalogExtensionError: New master data could not be saved
        EntityCommitError: Employee records could not be saved
        CodeGenerationError: No unique project code could be generated
    """
    if session is not None:
        return _import_employees_impl(rows, actor, session)
    with session_scope() as session:
        return _import_employees_impl(rows, actor, session)


def _import_employees_impl(rows: Iterable[Any], actor: Optional[str], session: Session) -> ImportResult:
    """Implementation of import_employees."""
    import_rows: List[EmployeeImportRow] = [EmployeeImportRow.coerce(row) for row in rows]
    context = ImportContext.begin(session, FLOW, actor)

    extend_reference_catalogs(context, import_rows, EMPLOYEE_REFERENCE_FIELDS)

    context.stager = UpsertStager.load(
        session, Employee, key_of=lambda employee: normalize_name(employee.employee_id), entity_label=FLOW
    )
    process_rows(
        context,
        import_rows,
        key_of=_employee_key,
        duplicate_message=_duplicate_message,
        stage_row=_stage_employee_row,
        error_prefix=ERROR_PREFIX,
    )
    commit_staged(context)

    result = context.result
    log_operation(
        logger,
        operation="import_employees",
        outcome="success" if result.success else "partial",
        flow=FLOW,
        created_count=result.created_count,
        updated_count=result.updated_count,
        failed=len(result.errors),
    )
    return result
