"""
Department and SubDepartment models.

Departments form a two-level hierarchy: every sub-department belongs to
exactly one department. Imports may name a sub-department without its
department, in which case the parent is inferred (see heuristic_linker).
"""

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from .reference_data import ReferenceEntry


class Department(ReferenceEntry):
    """
    Top-level organizational unit.

    Relationships:
        sub_departments: One-to-Many with SubDepartment
    """

    __tablename__ = "departments"
    label = "Department"

    sub_departments = relationship("SubDepartment", back_populates="department")


class SubDepartment(ReferenceEntry):
    """
    Second-level organizational unit.

    Attributes:
        department_id: Foreign key to parent Department (required)
    """

    __tablename__ = "sub_departments"
    label = "Sub-Department"

    department_id = Column(
        String(36), ForeignKey("departments.id"), nullable=False, index=True
    )

    department = relationship("Department", back_populates="sub_departments")
