"""Service layer logging utilities.

Provides structured logging functions for service operations, enabling
consistent log format and context across the import pipeline phases.

Usage:
    from src.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    # Log a completed phase
    log_operation(
        logger,
        operation="extend_catalog",
        outcome="success",
        flow="employee",
        created_entries=4,
    )

    # Log a row-level failure
    log_operation(
        logger,
        operation="process_row",
        outcome="row_error",
        level=logging.DEBUG,
        row=7,
        error="Last Name is required",
    )
"""

import logging
from typing import Any, Optional

LOGGER_PREFIX = "salini_import.services"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured logger instance with the 'salini_import.services' prefix.

    Example:
        >>> logger = get_service_logger(__name__)
        >>> logger.name
        'salini_import.services.employee_import_service'
    """
    # Extract just the module name if full path is provided
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    The context is passed via the 'extra' parameter for structured logging,
    so context keys must not collide with LogRecord attributes ("name",
    "message", "module", ...).

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "extend_catalog", "commit_entities")
        outcome: Outcome description (e.g., "success", "row_error", "error")
        level: Log level (default: INFO). Use DEBUG for per-row logs.
        **context: Additional context fields
            Common fields:
            - flow: Import flow label ("employee", "sim card", "asset")
            - row: 1-based row number
            - created_count / updated_count: Counts written by a commit phase
            - error: Error message if outcome is "error"

    Example:
        >>> log_operation(
        ...     logger,
        ...     operation="commit_entities",
        ...     outcome="success",
        ...     flow="employee",
        ...     created_count=2,
        ...     updated_count=0,
        ... )
        # Logs: "commit_entities: success" with extra context
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    logger.log(level, f"{operation}: {outcome}", extra=extra)


def configure_logging(level: int = logging.INFO, fmt: Optional[str] = None) -> None:
    """
    Attach a stream handler to the service logger hierarchy.

    Intended for command-line entry points; library callers configure
    logging themselves.

    Args:
        level: Minimum level to emit
        fmt: Optional format string (defaults to LOG_FORMAT)
    """
    root = logging.getLogger(LOGGER_PREFIX)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt or LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)
