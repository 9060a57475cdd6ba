"""Tests for engine creation and session scope handling."""

import pytest
from sqlalchemy import inspect

from src.models import Department
from src.services.database import create_database_engine, init_database, session_scope


def test_init_database_creates_tables():
    engine = create_database_engine("sqlite:///:memory:")

    init_database(engine)

    tables = inspect(engine).get_table_names()
    for table in ("employees", "sim_cards", "assets", "departments", "employee_sim_cards"):
        assert table in tables


def test_session_scope_commits(test_db):
    with session_scope() as session:
        session.add(Department(name="Finance"))

    with session_scope() as session:
        assert session.query(Department).count() == 1


def test_session_scope_rolls_back_on_error(test_db):
    with pytest.raises(RuntimeError):
        with session_scope() as session:
            session.add(Department(name="Finance"))
            session.flush()
            raise RuntimeError("abort")

    with session_scope() as session:
        assert session.query(Department).count() == 0
