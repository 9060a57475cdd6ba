"""Datetime utilities for timezone-aware UTC timestamps and import dates.

Usage:
    from src.utils.datetime_utils import utc_now, parse_import_date

    # Instead of datetime.utcnow()
    timestamp = utc_now()

    # Spreadsheet-derived date cells
    start = parse_import_date("2024-03-01")
"""

from datetime import date, datetime, timezone
from typing import Optional, Union


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime.

    Returns:
        Current UTC datetime with timezone info
    """
    return datetime.now(timezone.utc)


def parse_import_date(value: Union[str, date, datetime, None]) -> Optional[datetime]:
    """Parse a date cell from an import row into a UTC datetime.

    Accepts ISO dates ("2024-03-01"), ISO datetimes with or without a
    trailing "Z", and already-decoded date/datetime objects.

    Args:
        value: Raw cell value

    Returns:
        UTC datetime, or None if value is blank

    Raises:
        ValueError: If the value is not a recognizable date
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if not text:
            return None
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
