# projectflow/repositories/memory.py
from __future__ import annotations

from uuid import UUID

from projectflow.models.allocation import Allocation
from projectflow.models.availability import AvailabilityWindow
from projectflow.models.time_off import TimeOffRequest


class InMemoryDirectory:
    def __init__(
        self,
        people: set[UUID] | None = None,
        projects: set[UUID] | None = None,
        tasks: set[UUID] | None = None,
    ):
        self.people = set(people or ())
        self.projects = set(projects or ())
        self.tasks = set(tasks or ())

    def person_exists(self, person_id: UUID) -> bool:
        return person_id in self.people

    def project_exists(self, project_id: UUID) -> bool:
        return project_id in self.projects

    def task_exists(self, task_id: UUID) -> bool:
        return task_id in self.tasks


class InMemoryResourceRepository:
    """Dict-backed repository for tests and local experiments.

    Writes are visible immediately; ``commit``/``rollback`` only count calls,
    the services validate before mutating so there is nothing to undo.
    """

    def __init__(self):
        self.allocations: dict[UUID, Allocation] = {}
        self.windows: dict[UUID, AvailabilityWindow] = {}
        self.requests: dict[UUID, TimeOffRequest] = {}
        self.commits = 0
        self.rollbacks = 0

    # ---- unit of work ----

    def lock_person(self, person_id: UUID) -> None:
        return None

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    # ---- allocations ----

    def get_allocation(self, allocation_id: UUID) -> Allocation | None:
        return self.allocations.get(allocation_id)

    def list_allocations(
        self,
        *,
        person_id: UUID | None = None,
        project_id: UUID | None = None,
        task_id: UUID | None = None,
    ) -> list[Allocation]:
        rows = [
            a for a in self.allocations.values()
            if (person_id is None or a.person_id == person_id)
            and (project_id is None or a.project_id == project_id)
            and (task_id is None or a.task_id == task_id)
        ]
        return sorted(rows, key=lambda a: a.start_date, reverse=True)

    def save_allocation(self, allocation: Allocation) -> None:
        self.allocations[allocation.id] = allocation

    def delete_allocation(self, allocation: Allocation) -> None:
        self.allocations.pop(allocation.id, None)

    # ---- availability ----

    def get_window(self, window_id: UUID) -> AvailabilityWindow | None:
        return self.windows.get(window_id)

    def list_windows(
        self,
        *,
        person_id: UUID | None = None,
        day_of_week: int | None = None,
    ) -> list[AvailabilityWindow]:
        rows = [
            w for w in self.windows.values()
            if (person_id is None or w.person_id == person_id)
            and (day_of_week is None or w.day_of_week == day_of_week)
        ]
        return sorted(rows, key=lambda w: (w.day_of_week, w.start_time))

    def save_window(self, window: AvailabilityWindow) -> None:
        self.windows[window.id] = window

    def delete_window(self, window: AvailabilityWindow) -> None:
        self.windows.pop(window.id, None)

    # ---- time off ----

    def get_request(self, request_id: UUID) -> TimeOffRequest | None:
        return self.requests.get(request_id)

    def list_requests(
        self,
        *,
        person_id: UUID | None = None,
        status: str | None = None,
    ) -> list[TimeOffRequest]:
        rows = [
            r for r in self.requests.values()
            if (person_id is None or r.person_id == person_id)
            and (status is None or r.status == status)
        ]
        return sorted(rows, key=lambda r: r.start_date, reverse=True)

    def save_request(self, request: TimeOffRequest) -> None:
        self.requests[request.id] = request

    def delete_request(self, request: TimeOffRequest) -> None:
        self.requests.pop(request.id, None)
