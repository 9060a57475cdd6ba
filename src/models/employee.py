"""
Employee model.

Employees are identified by their business employee code (natural key),
not by the surrogate id. Every organizational attribute is a nullable
foreign key into a master data table.
"""

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy import Enum as SQLEnum

from .base import BaseModel
from .enums import Status


class Employee(BaseModel):
    """
    Employee record.

    Attributes:
        employee_id: Business employee code, unique (e.g., "E1024")
        first_name: Given name
        last_name: Family name
        email: Optional email address
        phone: Optional phone number
        status: Active/inactive flag; only active employees can receive
            SIM card or asset assignments from an import
        *_id: Optional foreign keys into master data
    """

    __tablename__ = "employees"

    employee_id = Column(String(50), nullable=False, unique=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=True)
    status = Column(SQLEnum(Status), nullable=False, default=Status.ACTIVE)

    # Master data references
    department_id = Column(String(36), ForeignKey("departments.id"), nullable=True)
    sub_department_id = Column(String(36), ForeignKey("sub_departments.id"), nullable=True)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=True)
    nationality_id = Column(String(36), ForeignKey("nationalities.id"), nullable=True)
    employee_category_id = Column(
        String(36), ForeignKey("employee_categories.id"), nullable=True
    )
    employee_position_id = Column(
        String(36), ForeignKey("employee_positions.id"), nullable=True
    )
    cost_center_id = Column(String(36), ForeignKey("cost_centers.id"), nullable=True)

    @property
    def full_name(self) -> str:
        """Format first and last name for display."""
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        """True if the employee may receive new assignments."""
        return self.status == Status.ACTIVE

    def __repr__(self) -> str:
        """String representation of employee."""
        return f"Employee(id={self.id}, employee_id='{self.employee_id}')"
