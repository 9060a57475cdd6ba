"""
Tests for parent inference of auto-created sub-departments and items.
"""

from src.models import Department, SubDepartment
from src.services.heuristic_linker import ensure_default_parent, infer_parent_name, link_parent
from src.services.import_context import ImportContext
from src.services.import_rows import EmployeeImportRow
from src.services.reference_catalog import ParentLink, ReferenceField, extend_reference_catalogs

DEPARTMENT_FIELD = ReferenceField("department_name", Department, "department_id")
SUB_DEPARTMENT_FIELD = ReferenceField(
    "sub_department_name",
    SubDepartment,
    "sub_department_id",
    parent=ParentLink("department_name", Department, "department_id"),
)


def _rows(*pairs):
    return [
        EmployeeImportRow(sub_department_name=child, department_name=parent)
        for child, parent in pairs
    ]


class TestInferParentName:
    """Tests for the majority vote."""

    def test_majority_wins(self):
        rows = _rows(("X", "A"), ("X", "A"), ("X", "B"))

        assert infer_parent_name(rows, "sub_department_name", "department_name", "X") == "a"

    def test_tie_goes_to_first_seen(self):
        rows = _rows(("X", "B"), ("X", "A"), ("X", "A"), ("X", "B"))

        assert infer_parent_name(rows, "sub_department_name", "department_name", "x") == "b"

    def test_votes_are_case_insensitive(self):
        rows = _rows(("Payroll", "hr"), ("PAYROLL", "HR "), ("payroll", "Finance"))

        assert infer_parent_name(rows, "sub_department_name", "department_name", "Payroll") == "hr"

    def test_rows_for_other_children_are_ignored(self):
        rows = _rows(("Y", "B"), ("Y", "B"), ("X", "A"))

        assert infer_parent_name(rows, "sub_department_name", "department_name", "X") == "a"

    def test_no_parent_named(self):
        rows = _rows(("X", None), ("X", "  "))

        assert infer_parent_name(rows, "sub_department_name", "department_name", "X") is None


class TestLinkParent:
    """Tests for parent linking against the catalog."""

    def test_voted_parent_is_linked(self, session):
        rows = _rows(("Payroll", "Finance"), ("Payroll", "Finance"), ("Payroll", "HR"))
        context = ImportContext.begin(session, "employee", actor="tester")

        extend_reference_catalogs(context, rows, [DEPARTMENT_FIELD, SUB_DEPARTMENT_FIELD])

        payroll = session.query(SubDepartment).one()
        assert payroll.department.name == "Finance"
        assert session.query(Department).filter_by(normalized_name="general").count() == 0

    def test_orphan_gets_default_parent(self, session):
        rows = _rows(("Payroll", None))
        context = ImportContext.begin(session, "employee", actor="tester")

        extend_reference_catalogs(context, rows, [DEPARTMENT_FIELD, SUB_DEPARTMENT_FIELD])

        payroll = session.query(SubDepartment).one()
        assert payroll.department.name == "General"
        assert payroll.department.description == "Default department for orphaned sub-departments"

    def test_default_parent_created_once(self, session):
        rows = _rows(("Payroll", None), ("Audit", None), ("Treasury", ""))
        context = ImportContext.begin(session, "employee", actor="tester")

        extend_reference_catalogs(context, rows, [DEPARTMENT_FIELD, SUB_DEPARTMENT_FIELD])

        assert session.query(Department).count() == 1
        assert session.query(SubDepartment).count() == 3

    def test_existing_default_parent_is_reused(self, session):
        general = Department(name="general")
        session.add(general)
        session.commit()
        context = ImportContext.begin(session, "employee", actor="tester")

        assert ensure_default_parent(context, SUB_DEPARTMENT_FIELD) is general

    def test_unresolvable_vote_falls_back_to_default(self, session):
        rows = _rows(("Payroll", "Ghost"))
        context = ImportContext.begin(session, "employee", actor="tester")

        # the parent catalog was never extended, so "Ghost" does not resolve
        parent_id = link_parent(context, SUB_DEPARTMENT_FIELD, "payroll", rows)

        assert context.catalog(Department).lookup("General").id == parent_id
