# tests/test_intervals.py
"""
Overlap rules shared by allocations, availability and time off.
Boundaries are inclusive, a missing end means open-ended.
"""

from __future__ import annotations

from datetime import date, time

import pytest

from projectflow.services.intervals import covers, overlaps, time_overlaps


def d(day: int, month: int = 6) -> date:
    return date(2025, month, day)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((d(1), d(10)), (d(5), d(15)), True),    # partial
        ((d(1), d(30)), (d(5), d(15)), True),    # containment
        ((d(1), d(10)), (d(10), d(15)), True),   # touching boundary
        ((d(1), d(9)), (d(10), d(15)), False),   # adjacent, no shared day
        ((d(16), d(20)), (d(1), d(15)), False),  # after
        ((d(1), None), (d(20, 12), d(31, 12)), True),  # open-ended reaches the future
        ((d(10), None), (d(1), d(9)), False),    # open-ended starts after
        ((d(1), None), (d(5), None), True),      # both open-ended
    ],
)
def test_overlaps(a, b, expected):
    assert overlaps(a[0], a[1], b[0], b[1]) is expected
    # symmetric
    assert overlaps(b[0], b[1], a[0], a[1]) is expected


def test_single_day_ranges():
    assert overlaps(d(5), d(5), d(5), d(5))
    assert not overlaps(d(5), d(5), d(6), d(6))


def test_time_overlaps_inclusive_boundary():
    nine, eleven, twelve, one_pm = time(9), time(11), time(12), time(13)

    assert time_overlaps(nine, twelve, eleven, one_pm)
    assert time_overlaps(nine, twelve, twelve, one_pm)
    assert not time_overlaps(nine, eleven, twelve, one_pm)


def test_covers():
    assert covers(d(1), d(10), d(1))
    assert covers(d(1), d(10), d(10))
    assert not covers(d(1), d(10), d(11))
    assert covers(d(1), None, d(31, 12))
