# projectflow/schemas/calendar.py
from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel

from projectflow.schemas.allocation import AllocationRead
from projectflow.schemas.time_off import TimeOffRead


class CalendarDayRead(BaseModel):
    day: date
    allocated_percentage: int
    on_time_off: bool

    model_config = {"from_attributes": True}


class PersonCalendarRead(BaseModel):
    person_id: UUID
    peak_percentage: int
    allocations: list[AllocationRead]
    time_off: list[TimeOffRead]
    days: list[CalendarDayRead]

    model_config = {"from_attributes": True}
