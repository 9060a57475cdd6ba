"""
SIM card master data: type, provider and plan.
"""

from .reference_data import ReferenceEntry


class SimType(ReferenceEntry):
    """SIM form factor or usage type (e.g., "Data", "Voice")."""

    __tablename__ = "sim_types"
    label = "SIM Type"


class SimProvider(ReferenceEntry):
    """Network operator."""

    __tablename__ = "sim_providers"
    label = "SIM Provider"


class SimCardPlan(ReferenceEntry):
    """Tariff plan."""

    __tablename__ = "sim_card_plans"
    label = "SIM Card Plan"
