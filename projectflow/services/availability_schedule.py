# projectflow/services/availability_schedule.py
from __future__ import annotations

from datetime import time
from uuid import UUID, uuid4

import structlog

from projectflow.core.errors import InvalidInput, NotFound, OverlappingWindow
from projectflow.models.availability import AvailabilityWindow
from projectflow.repositories.base import dependency_guard
from projectflow.services.base import ResourceService
from projectflow.services.intervals import time_overlaps

log = structlog.get_logger(__name__)


def _validate_window(day_of_week: int, start_time: time, end_time: time) -> None:
    if isinstance(day_of_week, bool) or not isinstance(day_of_week, int) or not 0 <= day_of_week <= 6:
        raise InvalidInput("day_of_week_out_of_range", day_of_week=repr(day_of_week))
    if start_time.tzinfo is not None or end_time.tzinfo is not None:
        raise InvalidInput(
            "time_zone_not_allowed",
            start_time=start_time.isoformat(),
            end_time=end_time.isoformat(),
        )
    if start_time >= end_time:
        raise InvalidInput(
            "start_not_before_end",
            start_time=start_time.isoformat(),
            end_time=end_time.isoformat(),
        )


class AvailabilitySchedule(ResourceService):
    """Weekly recurring availability windows, one list per person and day."""

    def get_window(self, window_id: UUID) -> AvailabilityWindow:
        with dependency_guard("repository"):
            window = self.repo.get_window(window_id)
        if window is None:
            raise NotFound("window_not_found", window_id=str(window_id))
        return window

    def list_windows(self, person_id: UUID) -> list[AvailabilityWindow]:
        with dependency_guard("repository"):
            return self.repo.list_windows(person_id=person_id)

    def add_window(
        self,
        *,
        person_id: UUID,
        day_of_week: int,
        start_time: time,
        end_time: time,
    ) -> AvailabilityWindow:
        _validate_window(day_of_week, start_time, end_time)
        self._require_person(person_id)

        def body() -> AvailabilityWindow:
            self._ensure_free(person_id, day_of_week, start_time, end_time)

            now = self.clock()
            window = AvailabilityWindow(
                id=uuid4(),
                person_id=person_id,
                day_of_week=day_of_week,
                start_time=start_time,
                end_time=end_time,
                created_at=now,
                updated_at=now,
            )
            with dependency_guard("repository"):
                self.repo.save_window(window)
            return window

        window = self._mutate(person_id, body)
        log.info(
            "availability.added",
            window_id=str(window.id),
            person_id=str(person_id),
            day_of_week=day_of_week,
        )
        return window

    def revise_window(
        self,
        window_id: UUID,
        *,
        day_of_week: int,
        start_time: time,
        end_time: time,
    ) -> AvailabilityWindow:
        _validate_window(day_of_week, start_time, end_time)
        person_id = self.get_window(window_id).person_id

        def body() -> AvailabilityWindow:
            window = self.get_window(window_id)
            self._ensure_free(person_id, day_of_week, start_time, end_time, exclude_id=window.id)

            window.day_of_week = day_of_week
            window.start_time = start_time
            window.end_time = end_time
            window.updated_at = self.clock()
            with dependency_guard("repository"):
                self.repo.save_window(window)
            return window

        window = self._mutate(person_id, body)
        log.info("availability.revised", window_id=str(window_id), person_id=str(person_id))
        return window

    def remove_window(self, window_id: UUID) -> None:
        person_id = self.get_window(window_id).person_id

        def body() -> None:
            window = self.get_window(window_id)
            with dependency_guard("repository"):
                self.repo.delete_window(window)

        self._mutate(person_id, body)
        log.info("availability.removed", window_id=str(window_id), person_id=str(person_id))

    def _ensure_free(
        self,
        person_id: UUID,
        day_of_week: int,
        start_time: time,
        end_time: time,
        *,
        exclude_id: UUID | None = None,
    ) -> None:
        with dependency_guard("repository"):
            same_day = self.repo.list_windows(person_id=person_id, day_of_week=day_of_week)

        for existing in same_day:
            if existing.id == exclude_id:
                continue
            if time_overlaps(existing.start_time, existing.end_time, start_time, end_time):
                log.warning(
                    "availability.rejected",
                    person_id=str(person_id),
                    day_of_week=day_of_week,
                    conflicting_window_id=str(existing.id),
                )
                raise OverlappingWindow(
                    "window_overlaps_existing",
                    person_id=str(person_id),
                    day_of_week=day_of_week,
                    conflicting_window_id=str(existing.id),
                )
