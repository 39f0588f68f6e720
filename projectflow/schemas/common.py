# projectflow/schemas/common.py
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Strict request models: forbid unknown fields."""

    model_config = ConfigDict(extra="forbid")


class PersonSummary(BaseModel):
    id: UUID
    full_name: str

    model_config = {"from_attributes": True}


class ProjectSummary(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}
