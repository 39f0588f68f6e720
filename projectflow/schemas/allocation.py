# projectflow/schemas/allocation.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from projectflow.schemas.common import PersonSummary, ProjectSummary, StrictBaseModel


class AllocationTerms(StrictBaseModel):
    percentage: int = Field(
        ...,
        ge=1,
        le=100,
        description="Share of the person's capacity, 1..100",
        examples=[50],
    )
    start_date: date = Field(..., examples=["2025-06-01"])
    end_date: Optional[date] = Field(
        None,
        description="Inclusive last day; omit for an open-ended allocation",
        examples=["2025-06-30"],
    )

    @model_validator(mode="after")
    def validate_dates(self):
        if self.end_date is not None and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class AllocationCreate(AllocationTerms):
    person_id: UUID = Field(..., examples=["33333333-3333-3333-3333-333333333333"])
    project_id: UUID = Field(..., examples=["11111111-1111-1111-1111-111111111111"])
    task_id: Optional[UUID] = Field(None, description="Narrow the allocation to one task of the project")


class AllocationUpdate(AllocationTerms):
    pass


class AllocationRead(BaseModel):
    id: UUID
    person_id: UUID
    project_id: UUID
    task_id: UUID | None = None
    percentage: int
    start_date: date
    end_date: date | None = None
    created_at: datetime
    updated_at: datetime

    person: PersonSummary | None = None
    project: ProjectSummary | None = None

    model_config = {"from_attributes": True}
