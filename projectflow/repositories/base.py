# projectflow/repositories/base.py
"""Collaborator interfaces consumed by the resource core.

The core never talks to a database directly: it is handed a ``Directory``
(existence checks for referenced entities) and a ``ResourceRepository``
(CRUD and filtered queries). ``SqlResourceRepository`` and
``InMemoryResourceRepository`` are the two implementations.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Protocol
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from projectflow.core.errors import DependencyFailure, InvalidInput
from projectflow.models.allocation import Allocation
from projectflow.models.availability import AvailabilityWindow
from projectflow.models.time_off import TimeOffRequest


class Directory(Protocol):
    def person_exists(self, person_id: UUID) -> bool: ...

    def project_exists(self, project_id: UUID) -> bool: ...

    def task_exists(self, task_id: UUID) -> bool: ...


class ResourceRepository(Protocol):
    # ---- unit of work ----
    def lock_person(self, person_id: UUID) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    # ---- allocations (ordered by start_date desc) ----
    def get_allocation(self, allocation_id: UUID) -> Allocation | None: ...

    def list_allocations(
        self,
        *,
        person_id: UUID | None = None,
        project_id: UUID | None = None,
        task_id: UUID | None = None,
    ) -> list[Allocation]: ...

    def save_allocation(self, allocation: Allocation) -> None: ...

    def delete_allocation(self, allocation: Allocation) -> None: ...

    # ---- availability (ordered by day_of_week, start_time) ----
    def get_window(self, window_id: UUID) -> AvailabilityWindow | None: ...

    def list_windows(
        self,
        *,
        person_id: UUID | None = None,
        day_of_week: int | None = None,
    ) -> list[AvailabilityWindow]: ...

    def save_window(self, window: AvailabilityWindow) -> None: ...

    def delete_window(self, window: AvailabilityWindow) -> None: ...

    # ---- time off (ordered by start_date desc) ----
    def get_request(self, request_id: UUID) -> TimeOffRequest | None: ...

    def list_requests(
        self,
        *,
        person_id: UUID | None = None,
        status: str | None = None,
    ) -> list[TimeOffRequest]: ...

    def save_request(self, request: TimeOffRequest) -> None: ...

    def delete_request(self, request: TimeOffRequest) -> None: ...


# Failures of a collaborator, as opposed to domain decisions.
COLLABORATOR_ERRORS = (SQLAlchemyError, OSError, TimeoutError)


@contextmanager
def dependency_guard(collaborator: str) -> Iterator[None]:
    try:
        yield
    except IntegrityError as e:
        # a row rejected by a database constraint is bad input, not an outage
        raise InvalidInput("constraint_violated", error=type(e.orig).__name__) from e
    except COLLABORATOR_ERRORS as e:
        raise DependencyFailure(f"{collaborator}_unavailable", error=type(e).__name__) from e
