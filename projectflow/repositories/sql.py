# projectflow/repositories/sql.py
from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from projectflow.models.allocation import Allocation
from projectflow.models.availability import AvailabilityWindow
from projectflow.models.directory import Person, Project, ProjectTask
from projectflow.models.time_off import TimeOffRequest


class SqlDirectory:
    def __init__(self, db: Session):
        self.db = db

    def _exists(self, model, entity_id: UUID) -> bool:
        return self.db.execute(select(model.id).where(model.id == entity_id)).first() is not None

    def person_exists(self, person_id: UUID) -> bool:
        return self._exists(Person, person_id)

    def project_exists(self, project_id: UUID) -> bool:
        return self._exists(Project, project_id)

    def task_exists(self, task_id: UUID) -> bool:
        return self._exists(ProjectTask, task_id)


class SqlResourceRepository:
    """Repository over a SQLAlchemy session.

    Writes are flushed right away so constraint violations surface inside the
    service call; ``commit`` is issued by the service once the invariant
    holds, while the person lock is still held.
    """

    def __init__(self, db: Session):
        self.db = db

    # ---- unit of work ----

    def lock_person(self, person_id: UUID) -> None:
        # Row lock on the person: serializes check-then-act across worker
        # processes. SQLite has no FOR UPDATE and ignores it.
        self.db.execute(select(Person.id).where(Person.id == person_id).with_for_update())

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def _save(self, row) -> None:
        self.db.add(row)
        self.db.flush()
        # reload with the joined directory labels (person, project, approver)
        self.db.refresh(row)

    def _delete(self, row) -> None:
        self.db.delete(row)
        self.db.flush()

    # ---- allocations ----

    def get_allocation(self, allocation_id: UUID) -> Allocation | None:
        return self.db.get(Allocation, allocation_id)

    def list_allocations(
        self,
        *,
        person_id: UUID | None = None,
        project_id: UUID | None = None,
        task_id: UUID | None = None,
    ) -> list[Allocation]:
        stmt = select(Allocation)
        if person_id is not None:
            stmt = stmt.where(Allocation.person_id == person_id)
        if project_id is not None:
            stmt = stmt.where(Allocation.project_id == project_id)
        if task_id is not None:
            stmt = stmt.where(Allocation.task_id == task_id)
        stmt = stmt.order_by(Allocation.start_date.desc(), Allocation.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def save_allocation(self, allocation: Allocation) -> None:
        self._save(allocation)

    def delete_allocation(self, allocation: Allocation) -> None:
        self._delete(allocation)

    # ---- availability ----

    def get_window(self, window_id: UUID) -> AvailabilityWindow | None:
        return self.db.get(AvailabilityWindow, window_id)

    def list_windows(
        self,
        *,
        person_id: UUID | None = None,
        day_of_week: int | None = None,
    ) -> list[AvailabilityWindow]:
        stmt = select(AvailabilityWindow)
        if person_id is not None:
            stmt = stmt.where(AvailabilityWindow.person_id == person_id)
        if day_of_week is not None:
            stmt = stmt.where(AvailabilityWindow.day_of_week == day_of_week)
        stmt = stmt.order_by(AvailabilityWindow.day_of_week.asc(), AvailabilityWindow.start_time.asc())
        return list(self.db.execute(stmt).scalars().all())

    def save_window(self, window: AvailabilityWindow) -> None:
        self._save(window)

    def delete_window(self, window: AvailabilityWindow) -> None:
        self._delete(window)

    # ---- time off ----

    def get_request(self, request_id: UUID) -> TimeOffRequest | None:
        return self.db.get(TimeOffRequest, request_id)

    def list_requests(
        self,
        *,
        person_id: UUID | None = None,
        status: str | None = None,
    ) -> list[TimeOffRequest]:
        stmt = select(TimeOffRequest)
        if person_id is not None:
            stmt = stmt.where(TimeOffRequest.person_id == person_id)
        if status is not None:
            stmt = stmt.where(TimeOffRequest.status == status)
        stmt = stmt.order_by(TimeOffRequest.start_date.desc(), TimeOffRequest.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def save_request(self, request: TimeOffRequest) -> None:
        self._save(request)

    def delete_request(self, request: TimeOffRequest) -> None:
        self._delete(request)
