# projectflow/schemas/availability.py
from __future__ import annotations

from datetime import datetime, time
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from projectflow.schemas.common import StrictBaseModel


class WindowTerms(StrictBaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday ... 6 = Saturday", examples=[1])
    start_time: time = Field(..., examples=["09:00:00"])
    end_time: time = Field(..., examples=["12:00:00"])

    @field_validator("start_time", "end_time")
    @classmethod
    def reject_utc_offset(cls, v: time) -> time:
        # windows are wall-clock times of the person, stored without an offset
        if v.tzinfo is not None:
            raise ValueError("time must not carry a UTC offset")
        return v

    @model_validator(mode="after")
    def validate_times(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class AvailabilityCreate(WindowTerms):
    person_id: UUID


class AvailabilityUpdate(WindowTerms):
    pass


class AvailabilityRead(BaseModel):
    id: UUID
    person_id: UUID
    day_of_week: int
    start_time: time
    end_time: time
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
