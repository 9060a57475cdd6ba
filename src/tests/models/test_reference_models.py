"""
Tests for master data, main entity and assignment models.

Tests cover:
- Normalized names and their uniqueness constraint
- Enum parsing
- Natural key constraints
- to_dict serialization
"""

import pytest
from sqlalchemy.exc import IntegrityError

from src.models import (
    Department,
    Employee,
    SimCard,
    SimCardStatus,
    Status,
    SubDepartment,
    normalize_name,
)


class TestNormalizeName:
    """Tests for normalize_name."""

    def test_trims_and_casefolds(self):
        assert normalize_name("  FINANCE ") == "finance"
        assert normalize_name("Straße") == "strasse"

    def test_blank(self):
        assert normalize_name(None) == ""
        assert normalize_name("   ") == ""


class TestReferenceEntry:
    """Tests for reference entry behavior."""

    def test_normalized_name_set_on_construction(self):
        assert Department(name=" Human Resources ").normalized_name == "human resources"

    def test_normalized_name_is_unique(self, session):
        session.add_all([Department(name="Finance"), Department(name="FINANCE")])

        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_sub_department_relationship(self, session):
        finance = Department(name="Finance")
        payroll = SubDepartment(name="Payroll", department=finance)
        session.add(payroll)
        session.commit()

        assert finance.sub_departments == [payroll]


class TestEnums:
    """Tests for enum parsing."""

    def test_status_parse(self):
        assert Status.parse(" Active ") == Status.ACTIVE
        assert Status.parse("") is None
        with pytest.raises(ValueError):
            Status.parse("retired")

    def test_sim_status_falls_back_to_active(self):
        assert SimCardStatus.parse("Suspended") == SimCardStatus.SUSPENDED
        assert SimCardStatus.parse("unknown") == SimCardStatus.ACTIVE


class TestMainEntities:
    """Tests for natural key constraints and serialization."""

    def test_sim_card_pair_is_unique(self, session):
        session.add_all(
            [
                SimCard(sim_account_no="A1", sim_service_no="S1"),
                SimCard(sim_account_no="A1", sim_service_no="S1"),
            ]
        )

        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_employee_to_dict(self, session, active_employee):
        data = active_employee.to_dict()

        assert data["employee_id"] == "E100"
        assert data["status"] == "active"
        assert isinstance(data["created_at"], str)
        assert active_employee.full_name == "Ana Silva"
        assert active_employee.is_active is True

    def test_mark_created_assigns_id(self):
        employee = Employee(employee_id="E1", first_name="Ana", last_name="Silva")
        assert employee.id is None

        employee.mark_created("tester", None)

        assert employee.id is not None
        assert employee.created_by == "tester"
