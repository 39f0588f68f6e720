# projectflow/services/time_off_workflow.py
from __future__ import annotations

from datetime import date
from uuid import UUID, uuid4

import structlog

from projectflow.core.errors import InvalidInput, NotFound, OverlappingRequest
from projectflow.fsm.time_off_fsm import Decision, apply_decision, parse_decision
from projectflow.models.time_off import TimeOffRequest, TimeOffStatus, TimeOffType
from projectflow.repositories.base import dependency_guard
from projectflow.services.base import ResourceService
from projectflow.services.intervals import overlaps

log = structlog.get_logger(__name__)


def _parse_type(value: str | TimeOffType) -> TimeOffType:
    if isinstance(value, TimeOffType):
        return value
    try:
        return TimeOffType(str(value).strip())
    except ValueError:
        raise InvalidInput(
            "unknown_request_type",
            request_type=str(value),
            allowed=[t.value for t in TimeOffType],
        )


def _parse_status(value: str | TimeOffStatus) -> TimeOffStatus:
    if isinstance(value, TimeOffStatus):
        return value
    try:
        return TimeOffStatus(str(value).strip())
    except ValueError:
        raise InvalidInput("unknown_status", status=str(value))


class TimeOffWorkflow(ResourceService):
    """Time-off requests and their approval.

    Requests start ``pending`` and are decided once (``approved`` or
    ``rejected``). Only non-rejected requests block new overlapping ones;
    a decision does not re-check overlap.
    """

    def get_request(self, request_id: UUID) -> TimeOffRequest:
        with dependency_guard("repository"):
            request = self.repo.get_request(request_id)
        if request is None:
            raise NotFound("request_not_found", request_id=str(request_id))
        return request

    def list_requests(
        self,
        *,
        person_id: UUID | None = None,
        status: str | TimeOffStatus | None = None,
    ) -> list[TimeOffRequest]:
        status_value = _parse_status(status).value if status is not None else None
        with dependency_guard("repository"):
            return self.repo.list_requests(person_id=person_id, status=status_value)

    def submit_request(
        self,
        *,
        person_id: UUID,
        start_date: date,
        end_date: date,
        request_type: str | TimeOffType,
        notes: str | None = None,
    ) -> TimeOffRequest:
        if start_date > end_date:
            raise InvalidInput(
                "start_after_end",
                start_date=start_date.isoformat(),
                end_date=end_date.isoformat(),
            )
        kind = _parse_type(request_type)
        self._require_person(person_id)

        def body() -> TimeOffRequest:
            self._ensure_no_overlap(person_id, start_date, end_date)

            now = self.clock()
            request = TimeOffRequest(
                id=uuid4(),
                person_id=person_id,
                start_date=start_date,
                end_date=end_date,
                status=TimeOffStatus.pending.value,
                request_type=kind.value,
                notes=(notes or "").strip(),
                approved_by=None,
                approved_at=None,
                created_at=now,
                updated_at=now,
            )
            with dependency_guard("repository"):
                self.repo.save_request(request)
            return request

        request = self._mutate(person_id, body)
        log.info(
            "timeoff.submitted",
            request_id=str(request.id),
            person_id=str(person_id),
            request_type=kind.value,
        )
        return request

    def decide(self, request_id: UUID, decision: str | Decision, approver_id: UUID) -> TimeOffRequest:
        decision = parse_decision(decision)
        person_id = self.get_request(request_id).person_id
        self._require_person(approver_id)

        def body() -> TimeOffRequest:
            request = self.get_request(request_id)
            to_status = apply_decision(TimeOffStatus(request.status), decision)

            now = self.clock()
            request.status = to_status.value
            if to_status is TimeOffStatus.approved:
                request.approved_by = approver_id
                request.approved_at = now
            request.updated_at = now
            with dependency_guard("repository"):
                self.repo.save_request(request)
            return request

        request = self._mutate(person_id, body)
        log.info(
            "timeoff.decided",
            request_id=str(request_id),
            person_id=str(person_id),
            status=request.status,
            approver_id=str(approver_id),
        )
        return request

    def remove_request(self, request_id: UUID) -> None:
        person_id = self.get_request(request_id).person_id

        def body() -> None:
            request = self.get_request(request_id)
            with dependency_guard("repository"):
                self.repo.delete_request(request)

        self._mutate(person_id, body)
        log.info("timeoff.removed", request_id=str(request_id), person_id=str(person_id))

    def _ensure_no_overlap(self, person_id: UUID, start_date: date, end_date: date) -> None:
        with dependency_guard("repository"):
            existing = self.repo.list_requests(person_id=person_id)

        for other in existing:
            if other.status == TimeOffStatus.rejected.value:
                continue
            if overlaps(other.start_date, other.end_date, start_date, end_date):
                log.warning(
                    "timeoff.rejected_overlap",
                    person_id=str(person_id),
                    conflicting_request_id=str(other.id),
                )
                raise OverlappingRequest(
                    "request_overlaps_existing",
                    person_id=str(person_id),
                    conflicting_request_id=str(other.id),
                    conflicting_status=other.status,
                )
