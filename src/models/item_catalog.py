"""
Item catalog models for physical assets.

Hierarchy: ItemCategory > Item. Every asset references an Item, and every
Item must belong to a category.

Example: Item "Latitude 5440" under ItemCategory "Laptops"
"""

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from .reference_data import ReferenceEntry


class ItemCategory(ReferenceEntry):
    """
    Asset item category.

    Relationships:
        items: One-to-Many with Item
    """

    __tablename__ = "item_categories"
    label = "Item Category"

    items = relationship("Item", back_populates="item_category")


class Item(ReferenceEntry):
    """
    Catalog item (make/model) that assets are instances of.

    Attributes:
        item_category_id: Foreign key to parent ItemCategory (required)
    """

    __tablename__ = "items"
    label = "Item"

    item_category_id = Column(
        String(36), ForeignKey("item_categories.id"), nullable=False, index=True
    )

    item_category = relationship("ItemCategory", back_populates="items")
