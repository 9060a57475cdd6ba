"""Services package - Import pipeline for employee, SIM card and asset master data.

Architecture:
- Flows: One module per import flow exposing import_<entity>(rows, ..., session=None)
- Pipeline: extend reference catalogs -> process rows -> commit (entities, then assignments)
- Transactions: Managed via session_scope() context manager when no session is supplied
- Exceptions: Consistent error handling via ServiceError hierarchy

Service Modules:
- employee_import_service: Employee rows keyed by employee code
- sim_card_import_service: SIM card rows keyed by account + service number
- asset_import_service: Asset rows keyed by asset tag

Pipeline Modules:
- reference_catalog: Name-to-id snapshots and auto-creation of master data
- heuristic_linker: Parent inference for new sub-departments and items
- code_generator: Unique project codes
- row_processor: Ordered per-row validation with error capture
- upsert_stager: Create/update staging and phased commits
- import_result: Counts and per-row errors returned to callers

Infrastructure:
- exceptions: Custom exception classes for service layer errors
- database: Session management and database utilities
- logging_utils: Structured service logging
"""

from . import database

from .employee_import_service import import_employees
from .sim_card_import_service import import_sim_cards
from .asset_import_service import import_assets

from .import_result import ImportResult, ImportRowError
from .import_rows import AssetImportRow, EmployeeImportRow, SimCardImportRow

from .exceptions import (
    ServiceError,
    RowValidationError,
    BatchFatalError,
    CatalogExtensionError,
    EntityCommitError,
    AssociationCommitError,
    SystemicError,
    CodeGenerationError,
)

__all__ = [
    "database",
    "import_employees",
    "import_sim_cards",
    "import_assets",
    "ImportResult",
    "ImportRowError",
    "EmployeeImportRow",
    "SimCardImportRow",
    "AssetImportRow",
    "ServiceError",
    "RowValidationError",
    "BatchFatalError",
    "CatalogExtensionError",
    "EntityCommitError",
    "AssociationCommitError",
    "SystemicError",
    "CodeGenerationError",
]
