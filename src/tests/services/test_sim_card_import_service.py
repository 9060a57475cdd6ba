"""
Tests for the SIM card bulk import.

Tests cover:
- Composite natural key (account + service number)
- Request-level errors (empty batch, unknown project)
- Status and start date parsing
- Employee assignment and duplicate-assignment suppression
- Partial success when the assignment commit fails
"""

from datetime import datetime

import pytest
from sqlalchemy.exc import SQLAlchemyError

from src.models import EmployeeSimCard, SimCard, SimCardStatus, SimType
from src.services.exceptions import AssociationCommitError
from src.services.sim_card_import_service import import_sim_cards


def _sim(account, service, **extra):
    return {"SimAccountNo": account, "SimServiceNo": service, **extra}


def _errors(result):
    return [(error.row, error.message) for error in result.errors]


class TestSimCardUpsert:
    """Tests for create/update by account + service number."""

    def test_composite_key(self, session):
        rows = [_sim("A1", "S1"), _sim("A1", "S2"), _sim("a1", " s1 ")]

        result = import_sim_cards(rows, session=session)

        assert result.created_count == 2
        assert _errors(result) == [
            (3, "Duplicate SIM card combination (Account: 'a1', Service: 's1') found in import data")
        ]

    def test_reimport_updates(self, session):
        import_sim_cards([_sim("A1", "S1", SimSerialNo="ICC-1")], session=session)

        result = import_sim_cards([_sim("A1", "S1", SimSerialNo="ICC-2")], session=session)

        assert (result.created_count, result.updated_count) == (0, 1)
        assert session.query(SimCard).one().sim_serial_no == "ICC-2"

    @pytest.mark.parametrize(
        "row,message",
        [
            (_sim("", "S1"), "SIM Account Number is required for unique identification."),
            (_sim("A1", None), "SIM Service Number is required for unique identification."),
        ],
    )
    def test_key_parts_required(self, session, row, message):
        result = import_sim_cards([row], session=session)

        assert _errors(result) == [(1, message)]

    def test_empty_batch(self, session):
        result = import_sim_cards([], session=session)

        assert _errors(result) == [(0, "No SIM cards provided for import.")]
        assert result.success is False

    def test_auto_created_master_data(self, session):
        import_sim_cards([_sim("A1", "S1", SimTypeName="eSIM")], session=session)

        sim_type = session.query(SimType).one()
        assert sim_type.description == "Auto-created from SIM card import"
        assert session.query(SimCard).one().sim_type_id == sim_type.id


class TestSimCardProject:
    """Tests for the optional target project."""

    def test_unknown_project_rejects_batch(self, session):
        result = import_sim_cards(
            [_sim("A1", "S1", SimTypeName="eSIM")], project_id="missing", session=session
        )

        assert _errors(result) == [(0, "Project with ID 'missing' not found.")]
        assert session.query(SimType).count() == 0
        assert session.query(SimCard).count() == 0

    def test_project_written_to_rows(self, session, project):
        import_sim_cards([_sim("A1", "S1")], project_id=project.id, session=session)

        assert session.query(SimCard).one().project_id == project.id


class TestSimCardFieldParsing:
    """Tests for status and date cells."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Suspended", SimCardStatus.SUSPENDED),
            ("EXPIRED", SimCardStatus.EXPIRED),
            ("inactive", SimCardStatus.INACTIVE),
            ("lost", SimCardStatus.ACTIVE),
            (None, SimCardStatus.ACTIVE),
        ],
    )
    def test_status(self, session, raw, expected):
        import_sim_cards([_sim("A1", "S1", SimStatus=raw)], session=session)

        assert session.query(SimCard).one().sim_status == expected

    def test_start_date(self, session):
        import_sim_cards([_sim("A1", "S1", SimStartDate="2024-03-01")], session=session)

        start = session.query(SimCard).one().sim_start_date
        assert (start.year, start.month, start.day) == (2024, 3, 1)

    def test_invalid_start_date_is_a_row_error(self, session):
        result = import_sim_cards(
            [_sim("A1", "S1", SimStartDate="not-a-date"), _sim("A2", "S2")], session=session
        )

        assert len(result.errors) == 1
        assert result.errors[0].row == 1
        assert result.errors[0].message.startswith("Error processing SIM card: ")
        assert result.created_count == 1


class TestSimCardAssignment:
    """Tests for assignment to employees."""

    def test_assigns_to_active_employee(self, session, active_employee):
        import_sim_cards([_sim("A1", "S1", AssignedTo="e100")], session=session)

        sim_card = session.query(SimCard).one()
        assignment = session.query(EmployeeSimCard).one()
        assert sim_card.assigned_to == active_employee.id
        assert assignment.employee_id == active_employee.id
        assert assignment.sim_card_id == sim_card.id

    def test_reimport_does_not_duplicate_assignment(self, session, active_employee):
        rows = [_sim("A1", "S1", AssignedTo="E100")]
        import_sim_cards(rows, session=session)

        result = import_sim_cards(rows, session=session)

        assert result.updated_count == 1
        assert session.query(EmployeeSimCard).count() == 1

    def test_inactive_employee_is_not_assigned(self, session, inactive_employee):
        result = import_sim_cards([_sim("A1", "S1", AssignedTo="E200")], session=session)

        assert result.success is True
        assert session.query(SimCard).one().assigned_to is None
        assert session.query(EmployeeSimCard).count() == 0

    def test_unknown_employee_is_ignored(self, session):
        result = import_sim_cards([_sim("A1", "S1", AssignedTo="E999")], session=session)

        assert result.success is True
        assert session.query(EmployeeSimCard).count() == 0

    def test_assignment_failure_keeps_committed_cards(self, session, active_employee, monkeypatch):
        original_commit = session.commit
        calls = []

        def flaky_commit():
            calls.append(datetime.now())
            if len(calls) == 2:
                raise SQLAlchemyError("lock timeout")
            original_commit()

        monkeypatch.setattr(session, "commit", flaky_commit)

        with pytest.raises(AssociationCommitError) as exc_info:
            import_sim_cards([_sim("A1", "S1", AssignedTo="E100")], session=session)

        assert exc_info.value.phase == "commit_associations"
        assert exc_info.value.result.created_count == 1
        assert session.query(SimCard).count() == 1
        assert session.query(EmployeeSimCard).count() == 0
