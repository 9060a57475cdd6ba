"""
Database models package.

This package contains all SQLAlchemy ORM models for the application.
"""

from .base import Base, BaseModel
from .enums import Status, SimCardStatus, AssetStatus, AssignmentStatus
from .reference_data import (
    ReferenceEntry,
    Company,
    CostCenter,
    Nationality,
    EmployeeCategory,
    EmployeePosition,
    Project,
    normalize_name,
)
from .department import Department, SubDepartment
from .sim_reference import SimType, SimProvider, SimCardPlan
from .item_catalog import ItemCategory, Item
from .employee import Employee
from .sim_card import SimCard
from .asset import Asset
from .assignment import EmployeeSimCard, EmployeeAsset

__all__ = [
    "Base",
    "BaseModel",
    "Status",
    "SimCardStatus",
    "AssetStatus",
    "AssignmentStatus",
    "ReferenceEntry",
    "Company",
    "CostCenter",
    "Nationality",
    "EmployeeCategory",
    "EmployeePosition",
    "Project",
    "normalize_name",
    "Department",
    "SubDepartment",
    "SimType",
    "SimProvider",
    "SimCardPlan",
    "ItemCategory",
    "Item",
    "Employee",
    "SimCard",
    "Asset",
    "EmployeeSimCard",
    "EmployeeAsset",
]
