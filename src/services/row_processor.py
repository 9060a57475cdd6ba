"""
Row processing loop shared by the import flows.

Rows are processed strictly in input order with 1-based row numbers. Each
flow supplies a natural-key function, a duplicate message and a row
stager; this module owns the loop and guarantees that a failing row
records exactly one error and leaves nothing staged.

Flow row stagers must therefore do every check and conversion that can
fail before handing values to the upsert stager.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet, Iterable, Optional, Sequence, Set

from src.models import normalize_name

from .exceptions import RowValidationError
from .logging_utils import get_service_logger, log_operation

if TYPE_CHECKING:
    from .import_context import ImportContext
    from .reference_catalog import ReferenceField

logger = get_service_logger(__name__)

RowStager = Callable[["ImportContext", Any, int], None]


# ============================================================================
# Field Helpers
# ============================================================================


def clean_text(value) -> Optional[str]:
    """Trim a cell; blank becomes None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def clean_optional(value, placeholders: FrozenSet[str] = frozenset()) -> Optional[str]:
    """
    Trim a cell, treating placeholder tokens (case-insensitive) as blank.

    Example:
        >>> clean_optional(" N/A ", frozenset({"n/a", "-"})) is None
        True
    """
    text = clean_text(value)
    if text is None or text.lower() in placeholders:
        return None
    return text


def require(row, attr: str, label: str, message: Optional[str] = None) -> str:
    """
    Return the trimmed value of a required field.

    Raises:
        RowValidationError: "<label> is required" (or message) if blank
    """
    text = clean_text(getattr(row, attr, None))
    if text is None:
        raise RowValidationError(message or f"{label} is required")
    return text


def resolve_reference(context: "ImportContext", field: "ReferenceField", row) -> Optional[str]:
    """
    Resolve one reference cell to an id.

    Returns:
        Entry id, or None if the cell is blank

    Raises:
        RowValidationError: "<Label> '<value>' not found"
    """
    raw = clean_text(getattr(row, field.attr, None))
    if raw is None:
        return None

    entry_id = context.catalog(field.model).resolve(raw)
    if entry_id is None:
        raise RowValidationError(f"{field.label} '{raw}' not found")
    return entry_id


def resolve_references(
    context: "ImportContext", fields: Iterable["ReferenceField"], row
) -> Dict[str, Optional[str]]:
    """Resolve every reference field of a row to {target column: id}."""
    return {field.target: resolve_reference(context, field, row) for field in fields}


def natural_key(*parts) -> Optional[str]:
    """
    Build a case-insensitive natural key.

    Returns:
        Normalized parts joined with "|", or None if any part is blank
    """
    normalized = [normalize_name(part) for part in parts]
    if not all(normalized):
        return None
    return "|".join(normalized)


# ============================================================================
# Row Loop
# ============================================================================


def process_rows(
    context: "ImportContext",
    rows: Sequence,
    key_of: Callable[[Any], Optional[str]],
    duplicate_message: Callable[[Any], str],
    stage_row: RowStager,
    error_prefix: str,
) -> None:
    """
    Run stage_row over every row, recording failures on context.result.

    A natural key seen earlier in the call rejects the row before any
    other check; the first occurrence is processed even if it fails. Rows
    with a blank key are not tracked and fail in stage_row's required
    field checks instead.

    Args:
        context: Batch context
        rows: Coerced import rows
        key_of: Returns the normalized natural key of a row, or None
        duplicate_message: Message for a repeated key
        stage_row: Validates, resolves and stages one row
        error_prefix: Prefix for unexpected exceptions
    """
    seen: Set[str] = set()
    failed = 0

    # staged updates must not reach the store before the commit phase
    with context.session.no_autoflush:
        for index, row in enumerate(rows):
            row_number = index + 1
            try:
                key = key_of(row)
                if key is not None:
                    if key in seen:
                        raise RowValidationError(duplicate_message(row))
                    seen.add(key)

                stage_row(context, row, row_number)
            except RowValidationError as e:
                failed += 1
                context.result.add_error(row_number, e.message)
                log_operation(
                    logger,
                    operation="process_row",
                    outcome="row_error",
                    level=logging.DEBUG,
                    flow=context.flow,
                    row=row_number,
                    error=e.message,
                )
            except Exception as e:
                failed += 1
                context.result.add_error(row_number, f"{error_prefix}: {e}")
                logger.warning(f"Row {row_number} of {context.flow} import failed unexpectedly: {e}")

    log_operation(
        logger,
        operation="process_rows",
        outcome="success",
        flow=context.flow,
        rows=len(rows),
        failed=failed,
    )
