# projectflow/api/deps.py
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from projectflow.core.config import settings
from projectflow.core.db import get_db
from projectflow.core.errors import ResourceError
from projectflow.core.locks import PersonLocks
from projectflow.core.rbac import Forbidden, ensure_allowed
from projectflow.fsm.time_off_fsm import TransitionNotAllowed
from projectflow.repositories.sql import SqlDirectory, SqlResourceRepository
from projectflow.services.allocation_ledger import AllocationLedger
from projectflow.services.availability_schedule import AvailabilitySchedule
from projectflow.services.resource_calendar import ResourceCalendar
from projectflow.services.time_off_workflow import TimeOffWorkflow


# -----------------------------------------------------------------------------
# Actor context (set by the auth gateway in front of this service)
# -----------------------------------------------------------------------------


def get_current_user_id(
    x_actor_user_id: str | None = Header(
        default=None,
        alias="X-Actor-User-Id",
        description="UUID of the acting user, taken from the verified token.",
        examples=["33333333-3333-3333-3333-333333333333"],
    ),
) -> UUID:
    if not x_actor_user_id:
        raise HTTPException(status_code=401, detail="Missing X-Actor-User-Id header")
    try:
        return UUID(x_actor_user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid X-Actor-User-Id format (must be UUID)") from e


def get_actor_role(
    x_role: str = Header(
        "member",
        alias="X-Role",
        description="Role of the acting user: admin, manager or member.",
        examples=["admin", "manager", "member"],
    )
) -> str:
    return x_role.strip()


@dataclass(frozen=True)
class ActorContext:
    actor_user_id: UUID
    role: str

    def require(self, permission: str) -> None:
        try:
            ensure_allowed(permission, self.role)
        except Forbidden as e:
            raise HTTPException(status_code=403, detail=str(e)) from e


def get_actor_context(
    actor_user_id: UUID = Depends(get_current_user_id),
    role: str = Depends(get_actor_role),
) -> ActorContext:
    return ActorContext(actor_user_id=actor_user_id, role=role)


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------

# One lock table per process, shared by every request.
person_locks = PersonLocks(timeout_seconds=settings.lock_timeout_seconds)


def get_ledger(db: Session = Depends(get_db)) -> AllocationLedger:
    return AllocationLedger(SqlResourceRepository(db), SqlDirectory(db), person_locks)


def get_schedule(db: Session = Depends(get_db)) -> AvailabilitySchedule:
    return AvailabilitySchedule(SqlResourceRepository(db), SqlDirectory(db), person_locks)


def get_workflow(db: Session = Depends(get_db)) -> TimeOffWorkflow:
    return TimeOffWorkflow(SqlResourceRepository(db), SqlDirectory(db), person_locks)


def get_calendar(db: Session = Depends(get_db)) -> ResourceCalendar:
    return ResourceCalendar(SqlResourceRepository(db), max_days=settings.calendar_max_days)


# -----------------------------------------------------------------------------
# Error mapping
# -----------------------------------------------------------------------------

STATUS_BY_KIND: dict[str, int] = {
    "invalid_input": 422,
    "not_found": 404,
    "allocation_exceeded": 409,
    "overlapping_window": 409,
    "overlapping_request": 409,
    TransitionNotAllowed.kind: 409,
    "dependency_failure": 503,
}


def http_error(e: ResourceError) -> HTTPException:
    return HTTPException(status_code=STATUS_BY_KIND.get(e.kind, 500), detail=e.as_dict())
