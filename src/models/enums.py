"""
Enumerations for master data, main entities and assignments.

This module contains enums used across the import models:
- Status: Lifecycle flag for master data and employees
- SimCardStatus: Service state of a SIM card
- AssetStatus: Availability of a physical asset
- AssignmentStatus: Lifecycle of an employee assignment record
"""

from enum import Enum
from typing import Optional


class Status(str, Enum):
    """
    Generic active/inactive flag.

    Values:
        ACTIVE: Record is in use (default for auto-created master data)
        INACTIVE: Record is retained for history but not selectable
    """

    ACTIVE = "active"
    INACTIVE = "inactive"

    @classmethod
    def parse(cls, value) -> Optional["Status"]:
        """
        Parse a free-text status cell.

        Returns:
            Status, or None if the value is blank

        Raises:
            ValueError: If the value is not a known status
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if not text:
            return None
        return cls(text)


class SimCardStatus(str, Enum):
    """SIM card service state."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    EXPIRED = "expired"

    @classmethod
    def parse(cls, value) -> "SimCardStatus":
        """Parse a status cell; blank or unknown values fall back to ACTIVE."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        try:
            return cls(text)
        except ValueError:
            return cls.ACTIVE


class AssetStatus(str, Enum):
    """
    Asset availability.

    Values:
        AVAILABLE: In stock, not assigned (default for imported assets)
        ASSIGNED: Currently held by an employee
        MAINTENANCE: Out for repair
        RETIRED: Disposed of
    """

    AVAILABLE = "available"
    ASSIGNED = "assigned"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"


class AssignmentStatus(str, Enum):
    """
    Assignment record lifecycle.

    An assignment is ASSIGNED from creation until the resource is handed
    back, at which point it becomes RETURNED and a new assignment may be
    created for the same pair.
    """

    ASSIGNED = "assigned"
    RETURNED = "returned"
