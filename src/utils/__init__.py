"""Utilities package for the master data import engine."""

from .config import get_config, reset_config, get_default_actor
from .datetime_utils import utc_now, parse_import_date

__all__ = [
    "get_config",
    "reset_config",
    "get_default_actor",
    "utc_now",
    "parse_import_date",
]
