"""
Asset model for tagged physical equipment.
"""

from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship

from .base import BaseModel
from .enums import AssetStatus


class Asset(BaseModel):
    """
    Physical asset identified by its asset tag.

    Attributes:
        asset_tag: Unique tag label (natural key)
        name: Display name
        description: Free text; imports write "Imported: <item> (<serial>)"
        serial_number: Manufacturer serial, unique when present
        status: Availability; ASSIGNED while an assignment is active
        condition: Free-text condition (e.g., "excellent")
        item_id: Foreign key to catalog Item
    """

    __tablename__ = "assets"

    asset_tag = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    serial_number = Column(String(100), nullable=True, unique=True)
    status = Column(SQLEnum(AssetStatus), nullable=False, default=AssetStatus.AVAILABLE)
    condition = Column(String(50), nullable=True)

    item_id = Column(String(36), ForeignKey("items.id"), nullable=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=True)

    item = relationship("Item")

    def __repr__(self) -> str:
        """String representation of asset."""
        return f"Asset(id={self.id}, asset_tag='{self.asset_tag}')"
