"""
Constants for the Salini master-data import engine.

This module defines all system-wide constants including:
- Application metadata
- Placeholder text written on auto-created master data
- Default parent names for hierarchical reference types
- Code generation settings
"""

from typing import FrozenSet

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "Salini Master Data Import"
APP_VERSION = "0.1.0"
DATABASE_FILENAME = "salini_import.db"

# Actor recorded in created_by/updated_by when the caller does not supply one
DEFAULT_ACTOR = "System"

# ============================================================================
# Auto-created Master Data
# ============================================================================

# "{flow}" is the import flow label, e.g. "employee"
AUTO_CREATED_DESCRIPTION = "Auto-created from {flow} import"

# Fallback parent used when no row in the batch names one
DEFAULT_PARENT_NAME = "General"
DEFAULT_PARENT_DESCRIPTION = "Default {parent} for orphaned {children}"

# ============================================================================
# Code Generation
# ============================================================================

PROJECT_CODE_PREFIX = "PROJ"
CODE_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
CODE_TOKEN_LENGTH = 8
MAX_CODE_ATTEMPTS = 100

# ============================================================================
# Field Normalization
# ============================================================================

# Cell values that mean "no value" in contact fields
CONTACT_PLACEHOLDERS: FrozenSet[str] = frozenset({"-"})

# Cell values that mean "no serial number" on assets
SERIAL_PLACEHOLDERS: FrozenSet[str] = frozenset({"n/a", "-"})

DEFAULT_ASSET_CONDITION = "excellent"
