# tests/factories.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from projectflow.models.directory import Person, Project, ProjectTask

# frozen clock of the unit tests
FIXED_NOW = datetime(2025, 5, 20, 9, 30, tzinfo=timezone.utc)


def make_person(
    db,
    *,
    full_name: str = "Test Person",
    role: str = "member",
    commit: bool = True,
    **overrides: Any,
) -> Person:
    person = Person(
        id=overrides.pop("id", uuid.uuid4()),
        full_name=full_name,
        role=role,
        **overrides,
    )
    db.add(person)
    if commit:
        db.commit()
    return person


def make_project(
    db,
    *,
    name: str | None = None,
    owner_id: uuid.UUID | None = None,
    commit: bool = True,
    **overrides: Any,
) -> Project:
    project = Project(
        id=overrides.pop("id", uuid.uuid4()),
        name=name or f"P-{uuid.uuid4().hex[:8]}",
        owner_id=owner_id,
        **overrides,
    )
    db.add(project)
    if commit:
        db.commit()
    return project


def make_task(
    db,
    *,
    project_id: uuid.UUID,
    title: str = "test task",
    commit: bool = True,
    **overrides: Any,
) -> ProjectTask:
    """
    Task rows only need to exist: the resource core references them by id.
    """
    task = ProjectTask(
        id=overrides.pop("id", uuid.uuid4()),
        project_id=project_id,
        title=title,
        **overrides,
    )
    db.add(task)
    if commit:
        db.commit()
    return task
