"""
Reference ("master") data models.

Master data rows are the lookup values that imported spreadsheets refer to
by display name (e.g., "Finance", "Saudi Arabia", "Project Neom"). Every
reference type stores the display name as typed plus a normalized form
(trimmed, case-folded) that is unique within the table, so "  finance "
and "FINANCE" always resolve to the same row.

Example: Company "Salini Impregilo" with normalized_name "salini impregilo"
"""

from sqlalchemy import Column, String, Text
from sqlalchemy import Enum as SQLEnum

from .base import BaseModel
from .enums import Status


def normalize_name(value) -> str:
    """
    Normalize a display name for case-insensitive matching.

    Returns:
        Trimmed, case-folded name, or "" when blank
    """
    if value is None:
        return ""
    return str(value).strip().casefold()


class ReferenceEntry(BaseModel):
    """
    Abstract master data row.

    Attributes:
        name: Display name as first supplied (trimmed)
        normalized_name: Case-insensitive match key, unique per table
        description: Free text; auto-created rows carry a placeholder
        status: Active/inactive flag (new rows are active)
    """

    __abstract__ = True

    # Label used in row error messages, e.g. "Department 'X' not found"
    label = "Reference"

    name = Column(String(200), nullable=False)
    normalized_name = Column(String(200), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    status = Column(SQLEnum(Status), nullable=False, default=Status.ACTIVE)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.name is not None and self.normalized_name is None:
            self.normalized_name = normalize_name(self.name)


class Company(ReferenceEntry):
    """Employing company."""

    __tablename__ = "companies"
    label = "Company"


class CostCenter(ReferenceEntry):
    """Accounting cost center."""

    __tablename__ = "cost_centers"
    label = "Cost Center"


class Nationality(ReferenceEntry):
    """Employee nationality."""

    __tablename__ = "nationalities"
    label = "Nationality"


class EmployeeCategory(ReferenceEntry):
    """Employee category (e.g., "Staff", "Labour")."""

    __tablename__ = "employee_categories"
    label = "Employee Category"


class EmployeePosition(ReferenceEntry):
    """Job title."""

    __tablename__ = "employee_positions"
    label = "Employee Position"


class Project(ReferenceEntry):
    """
    Project that employees, SIM cards and assets are allocated to.

    Unlike the other reference types a project also carries a short unique
    business code. Projects auto-created by an import receive a generated
    code (see code_generator).

    Attributes:
        code: Unique business code (e.g., "PROJ_20240301120000_A1B2C3D4")
    """

    __tablename__ = "projects"
    label = "Project"

    code = Column(String(100), nullable=False, unique=True, index=True)
