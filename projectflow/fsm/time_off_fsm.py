# projectflow/fsm/time_off_fsm.py

from __future__ import annotations

from enum import Enum

from projectflow.core.errors import InvalidInput, ResourceError
from projectflow.models.time_off import TimeOffStatus

"""Time-off FSM: approval workflow of a time-off request.

  pending -> approved
  pending -> rejected

approved и rejected терминальные: переоткрытие не поддерживается.
"""


class TransitionNotAllowed(ResourceError):
    kind = "transition_not_allowed"


class Decision(str, Enum):
    APPROVE = "approved"
    REJECT = "rejected"


TERMINAL = {
    TimeOffStatus.approved,
    TimeOffStatus.rejected,
}


# decision -> allowed from statuses + to status
TRANSITIONS: dict[Decision, tuple[set[TimeOffStatus], TimeOffStatus]] = {
    Decision.APPROVE: ({TimeOffStatus.pending}, TimeOffStatus.approved),
    Decision.REJECT: ({TimeOffStatus.pending}, TimeOffStatus.rejected),
}


def parse_decision(decision_raw: str | Decision) -> Decision:
    if isinstance(decision_raw, Decision):
        return decision_raw
    try:
        return Decision(str(decision_raw).strip())
    except ValueError:
        raise InvalidInput(
            "unknown_decision",
            decision=str(decision_raw),
            allowed=[d.value for d in Decision],
        )


def apply_decision(current: TimeOffStatus, decision_raw: str | Decision) -> TimeOffStatus:
    """Returns the status a request moves to, or raises TransitionNotAllowed."""

    decision = parse_decision(decision_raw)

    allowed_from, to_status = TRANSITIONS[decision]
    if current not in allowed_from:
        raise TransitionNotAllowed(
            "status_is_terminal" if current in TERMINAL else "transition_not_allowed",
            from_status=current.value,
            decision=decision.value,
            allowed_from=sorted(s.value for s in allowed_from),
        )

    return to_status
