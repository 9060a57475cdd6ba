"""
Assignment models linking employees to SIM cards and assets.

An assignment has its own lifecycle independent of the resource: it is
ASSIGNED when created and RETURNED when handed back. At most one ASSIGNED
record may exist per (employee, resource) pair.
"""

from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Index
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship

from src.utils.datetime_utils import utc_now

from .base import BaseModel
from .enums import AssignmentStatus


class EmployeeSimCard(BaseModel):
    """
    SIM card handed to an employee.

    Attributes:
        employee_id: Foreign key to Employee (surrogate id, not the code)
        sim_card_id: Foreign key to SimCard
        assigned_date: When the card was handed over
        returned_date: When it came back (None while active)
        status: ASSIGNED or RETURNED
    """

    __tablename__ = "employee_sim_cards"

    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False)
    sim_card_id = Column(String(36), ForeignKey("sim_cards.id"), nullable=False)
    assigned_date = Column(DateTime, nullable=False, default=utc_now)
    returned_date = Column(DateTime, nullable=True)
    status = Column(
        SQLEnum(AssignmentStatus), nullable=False, default=AssignmentStatus.ASSIGNED
    )
    notes = Column(Text, nullable=True)

    employee = relationship("Employee")
    sim_card = relationship("SimCard")

    __table_args__ = (
        Index("idx_employee_sim_card_pair", "employee_id", "sim_card_id", "status"),
    )


class EmployeeAsset(BaseModel):
    """
    Asset handed to an employee.

    Attributes:
        employee_id: Foreign key to Employee
        asset_id: Foreign key to Asset
        assigned_date: When the asset was handed over
        returned_date: When it came back (None while active)
        status: ASSIGNED or RETURNED
    """

    __tablename__ = "employee_assets"

    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False)
    asset_id = Column(String(36), ForeignKey("assets.id"), nullable=False)
    assigned_date = Column(DateTime, nullable=False, default=utc_now)
    returned_date = Column(DateTime, nullable=True)
    status = Column(
        SQLEnum(AssignmentStatus), nullable=False, default=AssignmentStatus.ASSIGNED
    )
    notes = Column(Text, nullable=True)

    employee = relationship("Employee")
    asset = relationship("Asset")

    __table_args__ = (
        Index("idx_employee_asset_pair", "employee_id", "asset_id", "status"),
    )
