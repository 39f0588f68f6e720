# tests/test_time_off_fsm.py
from __future__ import annotations

import pytest

from projectflow.core.errors import InvalidInput
from projectflow.fsm.time_off_fsm import Decision, TransitionNotAllowed, apply_decision
from projectflow.models.time_off import TimeOffStatus


def test_pending_can_be_approved():
    assert apply_decision(TimeOffStatus.pending, "approved") is TimeOffStatus.approved


def test_pending_can_be_rejected():
    assert apply_decision(TimeOffStatus.pending, Decision.REJECT) is TimeOffStatus.rejected


@pytest.mark.parametrize("current", [TimeOffStatus.approved, TimeOffStatus.rejected])
@pytest.mark.parametrize("decision", ["approved", "rejected"])
def test_terminal_statuses_have_no_transitions(current, decision):
    with pytest.raises(TransitionNotAllowed) as exc:
        apply_decision(current, decision)
    assert exc.value.reason == "status_is_terminal"
    assert exc.value.details["from_status"] == current.value


@pytest.mark.parametrize("raw", ["pending", "reopen", ""])
def test_unknown_decision_is_invalid_input(raw):
    with pytest.raises(InvalidInput) as exc:
        apply_decision(TimeOffStatus.pending, raw)
    assert exc.value.reason == "unknown_decision"
