# projectflow/services/intervals.py
"""Interval overlap rules shared by allocations, availability and time off.

Boundaries are inclusive everywhere: a range ending on day X and a range
starting on day X overlap, and so do windows 09:00-12:00 and 12:00-13:00.
An end of ``None`` means the range is open-ended.
"""

from __future__ import annotations

from datetime import date, time
from typing import TypeVar

T = TypeVar("T", date, time)


def _overlaps(start_a: T, end_a: T | None, start_b: T, end_b: T | None) -> bool:
    a_reaches_b = end_b is None or start_a <= end_b
    b_reaches_a = end_a is None or start_b <= end_a
    return a_reaches_b and b_reaches_a


def overlaps(start_a: date, end_a: date | None, start_b: date, end_b: date | None) -> bool:
    """True if the date ranges [start_a, end_a] and [start_b, end_b] share a day."""
    return _overlaps(start_a, end_a, start_b, end_b)


def time_overlaps(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """Same rule as :func:`overlaps` for time-of-day windows."""
    return _overlaps(start_a, end_a, start_b, end_b)


def covers(start: date, end: date | None, day: date) -> bool:
    return overlaps(start, end, day, day)
