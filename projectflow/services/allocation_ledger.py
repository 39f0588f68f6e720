# projectflow/services/allocation_ledger.py
from __future__ import annotations

from datetime import date
from uuid import UUID, uuid4

import structlog

from projectflow.core.errors import AllocationExceeded, InvalidInput, NotFound
from projectflow.models.allocation import Allocation
from projectflow.repositories.base import dependency_guard
from projectflow.services.base import ResourceService
from projectflow.services.intervals import overlaps

log = structlog.get_logger(__name__)

MAX_PERCENTAGE = 100


def _validate_terms(percentage: int, start_date: date, end_date: date | None) -> None:
    if isinstance(percentage, bool) or not isinstance(percentage, int):
        raise InvalidInput("percentage_not_integer", percentage=repr(percentage))
    if not 1 <= percentage <= MAX_PERCENTAGE:
        raise InvalidInput("percentage_out_of_range", percentage=percentage)
    if end_date is not None and start_date > end_date:
        raise InvalidInput(
            "start_after_end",
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
        )


class AllocationLedger(ResourceService):
    """Fractional allocation of people to projects/tasks.

    Invariant: for one person, allocations overlapping any day never add up
    to more than 100 percent. The check sums every allocation overlapping the
    requested range, which is never looser than a per-day peak.
    """

    # ---------- queries ----------

    def get_allocation(self, allocation_id: UUID) -> Allocation:
        with dependency_guard("repository"):
            allocation = self.repo.get_allocation(allocation_id)
        if allocation is None:
            raise NotFound("allocation_not_found", allocation_id=str(allocation_id))
        return allocation

    def list_allocations(
        self,
        *,
        person_id: UUID | None = None,
        project_id: UUID | None = None,
        task_id: UUID | None = None,
    ) -> list[Allocation]:
        with dependency_guard("repository"):
            return self.repo.list_allocations(person_id=person_id, project_id=project_id, task_id=task_id)

    def committed_percentage(
        self,
        person_id: UUID,
        start_date: date,
        end_date: date | None,
        *,
        exclude_id: UUID | None = None,
    ) -> int:
        """Sum of the person's allocations overlapping [start_date, end_date]."""
        with dependency_guard("repository"):
            rows = self.repo.list_allocations(person_id=person_id)
        return sum(
            a.percentage for a in rows
            if a.id != exclude_id and overlaps(a.start_date, a.end_date, start_date, end_date)
        )

    # ---------- mutations ----------

    def propose_allocation(
        self,
        *,
        person_id: UUID,
        project_id: UUID,
        task_id: UUID | None = None,
        percentage: int,
        start_date: date,
        end_date: date | None = None,
    ) -> Allocation:
        _validate_terms(percentage, start_date, end_date)

        self._require_person(person_id)
        with dependency_guard("directory"):
            project_ok = self.directory.project_exists(project_id)
            task_ok = task_id is None or self.directory.task_exists(task_id)
        if not project_ok:
            raise NotFound("project_not_found", project_id=str(project_id))
        if not task_ok:
            raise NotFound("task_not_found", task_id=str(task_id))

        def body() -> Allocation:
            self._ensure_capacity(person_id, percentage, start_date, end_date)

            now = self.clock()
            allocation = Allocation(
                id=uuid4(),
                person_id=person_id,
                project_id=project_id,
                task_id=task_id,
                percentage=percentage,
                start_date=start_date,
                end_date=end_date,
                created_at=now,
                updated_at=now,
            )
            with dependency_guard("repository"):
                self.repo.save_allocation(allocation)
            return allocation

        allocation = self._mutate(person_id, body)
        log.info(
            "allocation.proposed",
            allocation_id=str(allocation.id),
            person_id=str(person_id),
            project_id=str(project_id),
            percentage=percentage,
        )
        return allocation

    def revise_allocation(
        self,
        allocation_id: UUID,
        *,
        percentage: int,
        start_date: date,
        end_date: date | None = None,
    ) -> Allocation:
        _validate_terms(percentage, start_date, end_date)
        person_id = self.get_allocation(allocation_id).person_id

        def body() -> Allocation:
            # re-read under the lock: the row may be gone by now
            allocation = self.get_allocation(allocation_id)
            self._ensure_capacity(person_id, percentage, start_date, end_date, exclude_id=allocation.id)

            allocation.percentage = percentage
            allocation.start_date = start_date
            allocation.end_date = end_date
            allocation.updated_at = self.clock()
            with dependency_guard("repository"):
                self.repo.save_allocation(allocation)
            return allocation

        allocation = self._mutate(person_id, body)
        log.info(
            "allocation.revised",
            allocation_id=str(allocation_id),
            person_id=str(person_id),
            percentage=percentage,
        )
        return allocation

    def remove_allocation(self, allocation_id: UUID) -> None:
        person_id = self.get_allocation(allocation_id).person_id

        def body() -> None:
            allocation = self.get_allocation(allocation_id)
            with dependency_guard("repository"):
                self.repo.delete_allocation(allocation)

        self._mutate(person_id, body)
        log.info("allocation.removed", allocation_id=str(allocation_id), person_id=str(person_id))

    # ---------- invariant ----------

    def _ensure_capacity(
        self,
        person_id: UUID,
        percentage: int,
        start_date: date,
        end_date: date | None,
        *,
        exclude_id: UUID | None = None,
    ) -> None:
        committed = self.committed_percentage(person_id, start_date, end_date, exclude_id=exclude_id)
        if committed + percentage > MAX_PERCENTAGE:
            log.warning(
                "allocation.rejected",
                person_id=str(person_id),
                committed=committed,
                requested=percentage,
            )
            raise AllocationExceeded(
                "allocation_exceeds_capacity",
                person_id=str(person_id),
                committed=committed,
                requested=percentage,
                available=max(MAX_PERCENTAGE - committed, 0),
            )
