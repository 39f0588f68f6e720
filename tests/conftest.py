# tests/conftest.py
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker as _sessionmaker
from sqlalchemy.pool import StaticPool

from projectflow.core.db import get_db
from projectflow.core.locks import PersonLocks
from projectflow.main import app
from projectflow.models.base import Base
from projectflow.repositories.memory import InMemoryDirectory, InMemoryResourceRepository
from projectflow.services.allocation_ledger import AllocationLedger
from projectflow.services.availability_schedule import AvailabilitySchedule
from projectflow.services.resource_calendar import ResourceCalendar
from projectflow.services.time_off_workflow import TimeOffWorkflow

from tests.factories import FIXED_NOW, make_person

# -----------------------------------------------------------------------------
# IMPORTANT: register all ORM tables in metadata before create_all
# -----------------------------------------------------------------------------
import projectflow.models.directory  # noqa: F401
import projectflow.models.allocation  # noqa: F401
import projectflow.models.availability  # noqa: F401
import projectflow.models.time_off  # noqa: F401



# =============================================================================
# In-memory collaborators (unit tests of the core)
# =============================================================================


@pytest.fixture()
def person_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture()
def project_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture()
def task_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture()
def approver_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture()
def directory(person_id, project_id, task_id, approver_id) -> InMemoryDirectory:
    return InMemoryDirectory(
        people={person_id, approver_id},
        projects={project_id},
        tasks={task_id},
    )


@pytest.fixture()
def repo() -> InMemoryResourceRepository:
    return InMemoryResourceRepository()


@pytest.fixture()
def locks() -> PersonLocks:
    return PersonLocks(timeout_seconds=2.0)


@pytest.fixture()
def ledger(repo, directory, locks) -> AllocationLedger:
    return AllocationLedger(repo, directory, locks, clock=lambda: FIXED_NOW)


@pytest.fixture()
def schedule(repo, directory, locks) -> AvailabilitySchedule:
    return AvailabilitySchedule(repo, directory, locks, clock=lambda: FIXED_NOW)


@pytest.fixture()
def workflow(repo, directory, locks) -> TimeOffWorkflow:
    return TimeOffWorkflow(repo, directory, locks, clock=lambda: FIXED_NOW)


@pytest.fixture()
def calendar(repo) -> ResourceCalendar:
    return ResourceCalendar(repo, max_days=62)


# =============================================================================
# SQL (SQLite in-memory, one database per test)
# =============================================================================


@pytest.fixture()
def engine():
    """
    One in-memory SQLite database per test.
    StaticPool: every session (and the TestClient worker threads) share the
    single connection that holds the database.
    """
    eng = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(eng, "connect")
    def _enable_fks(dbapi_connection, _record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(eng)
    try:
        yield eng
    finally:
        Base.metadata.drop_all(eng)
        eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return _sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# API
# =============================================================================


@pytest.fixture()
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def actor(db):
    return make_person(db, full_name="Resource Manager", role="manager")


@pytest.fixture()
def headers(actor) -> dict[str, str]:
    return {"X-Role": "manager", "X-Actor-User-Id": str(actor.id)}
