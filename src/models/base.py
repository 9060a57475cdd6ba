"""
Base model class for all database models.

Provides common functionality and fields for all models:
- Primary key (UUID4 string, assigned in Python so staged rows can be
  referenced before they are flushed)
- Creation and update attribution (timestamp + actor)
- Utility methods (to_dict)
- SQLAlchemy declarative base
"""

import uuid as uuid_lib
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base

from src.utils.datetime_utils import utc_now

# Create the declarative base for all models
Base = declarative_base()


def new_id() -> str:
    """Return a fresh primary key value."""
    return str(uuid_lib.uuid4())


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.

    All models should inherit from this class to get:
    - id: Primary key (UUID4 string)
    - created_at / created_by: Creation metadata, never touched by updates
    - updated_at / updated_by: Set whenever an import overwrites the row
    - to_dict(): Convert model to dictionary
    """

    __abstract__ = True

    id = Column(String(36), primary_key=True, default=new_id)

    # Attribution
    created_at = Column(DateTime, nullable=False, default=utc_now)
    created_by = Column(String(100), nullable=True)
    updated_at = Column(DateTime, nullable=True)
    updated_by = Column(String(100), nullable=True)

    def to_dict(self, include_relationships: bool = False) -> Dict[str, Any]:
        """
        Convert model instance to dictionary.

        Args:
            include_relationships: If True, include related objects (default: False)

        Returns:
            Dictionary representation of the model
        """
        result = {}

        for column in self.__table__.columns:
            value = getattr(self, column.name)

            # Convert datetime to ISO format string
            if isinstance(value, datetime):
                value = value.isoformat()
            # Enum columns serialize by value
            elif hasattr(value, "value"):
                value = value.value

            result[column.name] = value

        if include_relationships:
            for relationship in self.__mapper__.relationships:
                rel_name = relationship.key
                rel_value = getattr(self, rel_name)

                if rel_value is None:
                    result[rel_name] = None
                elif isinstance(rel_value, list):
                    result[rel_name] = [item.to_dict() for item in rel_value]
                else:
                    result[rel_name] = rel_value.to_dict()

        return result

    def mark_created(self, actor: str, timestamp: datetime) -> None:
        """Stamp creation metadata on a new row."""
        if self.id is None:
            self.id = new_id()
        self.created_at = timestamp
        self.created_by = actor

    def mark_updated(self, actor: str, timestamp: datetime) -> None:
        """Stamp update metadata; creation metadata is left untouched."""
        self.updated_at = timestamp
        self.updated_by = actor

    def __repr__(self) -> str:
        """
        String representation of model instance.

        Returns:
            String like "ClassName(id=..., name='...')"
        """
        class_name = self.__class__.__name__
        attrs = []

        if getattr(self, "id", None) is not None:
            attrs.append(f"id={self.id}")

        if getattr(self, "name", None) is not None:
            attrs.append(f"name='{self.name}'")

        attrs_str = ", ".join(attrs)
        return f"{class_name}({attrs_str})"
