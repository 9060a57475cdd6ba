"""Tests for the shared row processing loop and field helpers."""

import pytest

from src.models import Department
from src.services.exceptions import RowValidationError
from src.services.import_context import ImportContext
from src.services.import_rows import EmployeeImportRow
from src.services.reference_catalog import ReferenceField
from src.services.row_processor import (
    clean_optional,
    clean_text,
    natural_key,
    process_rows,
    require,
    resolve_reference,
)

DEPARTMENT_FIELD = ReferenceField("department_name", Department, "department_id")


class TestFieldHelpers:
    """Tests for cell cleaning helpers."""

    def test_clean_text(self):
        assert clean_text("  Ana ") == "Ana"
        assert clean_text("   ") is None
        assert clean_text(None) is None
        assert clean_text(42) == "42"

    def test_clean_optional_placeholders(self):
        placeholders = frozenset({"n/a", "-"})
        assert clean_optional(" N/A ", placeholders) is None
        assert clean_optional("-", placeholders) is None
        assert clean_optional("SN-1", placeholders) == "SN-1"

    def test_natural_key(self):
        assert natural_key(" A1 ", "S1") == "a1|s1"
        assert natural_key("A1", "") is None

    def test_require(self):
        row = EmployeeImportRow(first_name=" Ana ")
        assert require(row, "first_name", "First Name") == "Ana"

        with pytest.raises(RowValidationError, match="Last Name is required"):
            require(row, "last_name", "Last Name")

    def test_resolve_reference(self, session):
        session.add(Department(name="Finance"))
        session.commit()
        context = ImportContext.begin(session, "employee", actor="tester")

        assert resolve_reference(context, DEPARTMENT_FIELD, EmployeeImportRow(department_name="finance"))
        assert resolve_reference(context, DEPARTMENT_FIELD, EmployeeImportRow()) is None
        with pytest.raises(RowValidationError, match="Department 'Legal' not found"):
            resolve_reference(context, DEPARTMENT_FIELD, EmployeeImportRow(department_name=" Legal "))


class TestProcessRows:
    """Tests for the ordered loop."""

    def _run(self, session, rows, stage_row):
        context = ImportContext.begin(session, "employee", actor="tester")
        process_rows(
            context,
            rows,
            key_of=lambda row: natural_key(row.employee_id),
            duplicate_message=lambda row: f"Duplicate Employee ID '{row.employee_id}' found in import data",
            stage_row=stage_row,
            error_prefix="Unexpected error",
        )
        return context.result

    def test_rows_processed_in_order_with_row_numbers(self, session):
        seen = []

        result = self._run(
            session,
            [EmployeeImportRow(employee_id=code) for code in ("E1", "E2", "E3")],
            lambda context, row, number: seen.append((number, row.employee_id)),
        )

        assert seen == [(1, "E1"), (2, "E2"), (3, "E3")]
        assert result.success is True

    def test_unexpected_exception_becomes_row_error(self, session):
        def stage_row(context, row, number):
            if number == 2:
                raise KeyError("boom")

        result = self._run(session, [EmployeeImportRow(employee_id=c) for c in ("E1", "E2", "E3")], stage_row)

        assert [(e.row, e.message) for e in result.errors] == [(2, "Unexpected error: 'boom'")]

    def test_blank_keys_are_not_duplicates(self, session):
        calls = []

        self._run(
            session,
            [EmployeeImportRow(), EmployeeImportRow(employee_id="  ")],
            lambda context, row, number: calls.append(number),
        )

        assert calls == [1, 2]
