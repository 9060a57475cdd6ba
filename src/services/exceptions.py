"""Service layer exception classes for the master data import engine.

This module defines all custom exceptions used by the service layer to provide
consistent error handling across the import flows.

Exception Hierarchy:
    ServiceError (base)
    ├── RowValidationError          (row-scoped, always recovered locally)
    ├── BatchFatalError             (aborts the call, carries phase)
    │   ├── CatalogExtensionError
    │   ├── EntityCommitError
    │   └── AssociationCommitError
    └── SystemicError               (not attributable to a single row)
        └── CodeGenerationError
"""

from typing import Optional


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions should inherit from this class.
    """

    pass


class RowValidationError(ServiceError):
    """Raised while processing a single import row.

    The row processor catches it, records an ImportRowError with the
    exception message, and moves on to the next row.

    Example:
        >>> raise RowValidationError("Last Name is required")
        RowValidationError: Last Name is required
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BatchFatalError(ServiceError):
    """Raised when a pipeline phase fails and the call cannot continue.

    Args:
        phase: Pipeline phase that failed ("extend_catalog",
            "commit_entities", "commit_associations")
        message: Human-readable description
        original_error: Underlying store error, if any

    Phases committed before the failing one stay committed.
    """

    def __init__(self, phase: str, message: str, original_error: Optional[Exception] = None):
        self.phase = phase
        self.original_error = original_error
        super().__init__(f"[{phase}] {message}")


class CatalogExtensionError(BatchFatalError):
    """Raised when new master data rows cannot be persisted.

    Example:
        >>> raise CatalogExtensionError("employee", err)
        CatalogExtensionError: [extend_catalog] Failed to save master data during employee import: ...
    """

    def __init__(self, flow: str, original_error: Exception):
        self.flow = flow
        super().__init__(
            "extend_catalog",
            f"Failed to save master data during {flow} import: {original_error}",
            original_error,
        )


class EntityCommitError(BatchFatalError):
    """Raised when staged creates/updates cannot be committed.

    Master data created earlier in the same call remains committed.
    """

    def __init__(self, entity_type: str, original_error: Exception):
        self.entity_type = entity_type
        super().__init__(
            "commit_entities",
            f"Failed to save {entity_type} records: {original_error}",
            original_error,
        )


class AssociationCommitError(BatchFatalError):
    """Raised when staged assignments cannot be committed.

    Main entity creates and updates were already committed and are not
    rolled back. The partial ImportResult is attached so callers can still
    report what was written.

    Attributes:
        result: ImportResult with the committed counts and row errors
    """

    def __init__(self, association_type: str, original_error: Exception, result=None):
        self.association_type = association_type
        self.result = result
        super().__init__(
            "commit_associations",
            f"Failed to save {association_type} assignments: {original_error}",
            original_error,
        )


class SystemicError(ServiceError):
    """Base for failures that indicate a broken environment, not bad input."""

    pass


class CodeGenerationError(SystemicError):
    """Raised when no unique business code could be generated.

    Args:
        prefix: Code prefix being generated (e.g., "PROJ")
        attempts: Number of candidates tried

    Example:
        >>> raise CodeGenerationError("PROJ", 100)
        CodeGenerationError: Unable to generate unique PROJ code after 100 attempts
    """

    def __init__(self, prefix: str, attempts: int):
        self.prefix = prefix
        self.attempts = attempts
        self.phase = "extend_catalog"
        super().__init__(f"Unable to generate unique {prefix} code after {attempts} attempts")
