# projectflow/schemas/time_off.py
from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from projectflow.models.time_off import TimeOffStatus, TimeOffType
from projectflow.schemas.common import PersonSummary, StrictBaseModel


class TimeOffCreate(StrictBaseModel):
    person_id: UUID
    start_date: date = Field(..., examples=["2025-06-01"])
    end_date: date = Field(..., examples=["2025-06-10"])
    request_type: TimeOffType = TimeOffType.vacation
    notes: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def validate_dates(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class TimeOffDecision(StrictBaseModel):
    """Decision on a pending request; approver is the acting user."""

    status: Literal["approved", "rejected"]


class TimeOffRead(BaseModel):
    id: UUID
    person_id: UUID
    start_date: date
    end_date: date
    status: TimeOffStatus
    request_type: TimeOffType
    notes: str
    approved_by: UUID | None = None
    approved_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    person: PersonSummary | None = None
    approver: PersonSummary | None = None

    model_config = {"from_attributes": True}
