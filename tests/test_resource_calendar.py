# tests/test_resource_calendar.py
from __future__ import annotations

import uuid
from datetime import date

import pytest

from projectflow.core.errors import InvalidInput


def test_calendar_day_load_and_time_off(ledger, workflow, calendar, person_id, project_id, approver_id):
    ledger.propose_allocation(
        person_id=person_id, project_id=project_id, percentage=50,
        start_date=date(2025, 6, 1), end_date=date(2025, 6, 5),
    )
    ledger.propose_allocation(
        person_id=person_id, project_id=project_id, percentage=30,
        start_date=date(2025, 6, 4), end_date=None,
    )
    approved = workflow.submit_request(
        person_id=person_id, start_date=date(2025, 6, 6), end_date=date(2025, 6, 7), request_type="vacation",
    )
    workflow.decide(approved.id, "approved", approver_id)
    # pending requests are not on the calendar
    workflow.submit_request(
        person_id=person_id, start_date=date(2025, 6, 9), end_date=date(2025, 6, 9), request_type="personal",
    )

    (cal,) = calendar.build(date(2025, 6, 3), date(2025, 6, 9), [person_id])

    assert cal.person_id == person_id
    assert len(cal.allocations) == 2
    assert cal.time_off == [approved]
    assert [d.allocated_percentage for d in cal.days] == [50, 80, 80, 30, 30, 30, 30]
    assert [d.on_time_off for d in cal.days] == [False, False, False, True, True, False, False]
    assert cal.peak_percentage == 80


def test_calendar_skips_out_of_range_rows(ledger, calendar, person_id, project_id):
    ledger.propose_allocation(
        person_id=person_id, project_id=project_id, percentage=100,
        start_date=date(2025, 1, 1), end_date=date(2025, 1, 31),
    )

    (cal,) = calendar.build(date(2025, 6, 1), date(2025, 6, 2), [person_id])
    assert cal.allocations == []
    assert cal.peak_percentage == 0


def test_calendar_deduplicates_people(calendar, person_id):
    other = uuid.uuid4()
    cals = calendar.build(date(2025, 6, 1), date(2025, 6, 1), [person_id, other, person_id])
    assert [c.person_id for c in cals] == [person_id, other]


def test_calendar_range_validation(calendar, person_id):
    with pytest.raises(InvalidInput) as exc:
        calendar.build(date(2025, 6, 2), date(2025, 6, 1), [person_id])
    assert exc.value.reason == "start_after_end"

    with pytest.raises(InvalidInput) as exc:
        calendar.build(date(2025, 1, 1), date(2025, 12, 31), [person_id])
    assert exc.value.reason == "range_too_long"
