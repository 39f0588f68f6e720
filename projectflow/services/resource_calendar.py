# projectflow/services/resource_calendar.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from uuid import UUID

from projectflow.core.errors import InvalidInput
from projectflow.models.allocation import Allocation
from projectflow.models.time_off import TimeOffRequest, TimeOffStatus
from projectflow.repositories.base import ResourceRepository, dependency_guard
from projectflow.services.intervals import covers, overlaps


@dataclass(frozen=True)
class CalendarDay:
    day: date
    allocated_percentage: int
    on_time_off: bool


@dataclass
class PersonCalendar:
    person_id: UUID
    allocations: list[Allocation] = field(default_factory=list)
    time_off: list[TimeOffRequest] = field(default_factory=list)
    days: list[CalendarDay] = field(default_factory=list)

    @property
    def peak_percentage(self) -> int:
        return max((d.allocated_percentage for d in self.days), default=0)


class ResourceCalendar:
    """Read-only day-by-day view of allocation load and approved time off."""

    def __init__(self, repo: ResourceRepository, *, max_days: int = 366):
        self.repo = repo
        self.max_days = max_days

    def build(self, start: date, end: date, person_ids: list[UUID]) -> list[PersonCalendar]:
        if start > end:
            raise InvalidInput("start_after_end", start=start.isoformat(), end=end.isoformat())
        span = (end - start).days + 1
        if span > self.max_days:
            raise InvalidInput("range_too_long", days=span, max_days=self.max_days)

        return [self._for_person(person_id, start, end, span) for person_id in dict.fromkeys(person_ids)]

    def _for_person(self, person_id: UUID, start: date, end: date, span: int) -> PersonCalendar:
        with dependency_guard("repository"):
            allocations = self.repo.list_allocations(person_id=person_id)
            approved = self.repo.list_requests(person_id=person_id, status=TimeOffStatus.approved.value)

        cal = PersonCalendar(
            person_id=person_id,
            allocations=[a for a in allocations if overlaps(a.start_date, a.end_date, start, end)],
            time_off=[r for r in approved if overlaps(r.start_date, r.end_date, start, end)],
        )

        for offset in range(span):
            day = start + timedelta(days=offset)
            cal.days.append(
                CalendarDay(
                    day=day,
                    allocated_percentage=sum(
                        a.percentage for a in cal.allocations if covers(a.start_date, a.end_date, day)
                    ),
                    on_time_off=any(covers(r.start_date, r.end_date, day) for r in cal.time_off),
                )
            )
        return cal
