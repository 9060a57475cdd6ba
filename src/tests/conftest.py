"""Pytest configuration and fixtures for import pipeline tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session

import src.models  # noqa: F401  (registers every table on Base.metadata)
from src.models.base import Base
from src.utils.config import reset_config


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep tests away from the per-user database and actor settings."""
    monkeypatch.setenv("SALINI_IMPORT_DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.delenv("SALINI_IMPORT_ACTOR", raising=False)
    monkeypatch.delenv("SALINI_IMPORT_ENV", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean test database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database
    2. Creates all tables
    3. Provides the database to the test
    4. Drops all tables after the test completes
    """
    # Create in-memory SQLite database for testing
    engine = create_engine("sqlite:///:memory:", echo=False)

    # Create all tables
    Base.metadata.create_all(engine)

    # Create session factory
    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    Session = scoped_session(session_factory)

    # Monkey-patch the global session factory for tests
    import src.services.database as db_module

    original_get_session = db_module.get_session_factory
    db_module.get_session_factory = lambda: Session

    # Provide database to test
    yield Session

    # Cleanup
    Session.remove()
    Base.metadata.drop_all(engine)

    # Restore original session factory
    db_module.get_session_factory = original_get_session


@pytest.fixture(scope="function")
def session(test_db):
    """Session shared by the test and the import call under test."""
    return test_db()


@pytest.fixture(scope="function")
def active_employee(session):
    """An active employee with code E100."""
    from src.models import Employee, Status

    employee = Employee(employee_id="E100", first_name="Ana", last_name="Silva", status=Status.ACTIVE)
    session.add(employee)
    session.commit()
    return employee


@pytest.fixture(scope="function")
def inactive_employee(session):
    """An inactive employee with code E200."""
    from src.models import Employee, Status

    employee = Employee(employee_id="E200", first_name="Omar", last_name="Haddad", status=Status.INACTIVE)
    session.add(employee)
    session.commit()
    return employee


@pytest.fixture(scope="function")
def project(session):
    """An existing project."""
    from src.models import Project

    project = Project(name="Riyadh Metro", code="PROJ_RM")
    session.add(project)
    session.commit()
    return project
