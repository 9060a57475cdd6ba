"""
SimCard model.

A SIM card is identified by the combination of its account number and
service number; neither is unique on its own.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy import Enum as SQLEnum

from .base import BaseModel
from .enums import SimCardStatus


class SimCard(BaseModel):
    """
    SIM card record.

    Attributes:
        sim_account_no: Billing account number (natural key part 1)
        sim_service_no: Service / MSISDN number (natural key part 2)
        sim_start_date: Service start date
        sim_serial_no: ICCID printed on the card
        sim_status: Service state
        assigned_to: Id of the employee currently holding the card
    """

    __tablename__ = "sim_cards"

    sim_account_no = Column(String(100), nullable=False)
    sim_service_no = Column(String(100), nullable=False)
    sim_start_date = Column(DateTime, nullable=True)
    sim_serial_no = Column(String(100), nullable=True)
    sim_status = Column(SQLEnum(SimCardStatus), nullable=False, default=SimCardStatus.ACTIVE)

    sim_type_id = Column(String(36), ForeignKey("sim_types.id"), nullable=True)
    sim_provider_id = Column(String(36), ForeignKey("sim_providers.id"), nullable=True)
    sim_card_plan_id = Column(String(36), ForeignKey("sim_card_plans.id"), nullable=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=True)
    assigned_to = Column(String(36), ForeignKey("employees.id"), nullable=True)

    __table_args__ = (
        UniqueConstraint("sim_account_no", "sim_service_no", name="uq_sim_card_account_service"),
    )

    def __repr__(self) -> str:
        """String representation of SIM card."""
        return (
            f"SimCard(id={self.id}, "
            f"account='{self.sim_account_no}', "
            f"service='{self.sim_service_no}')"
        )
