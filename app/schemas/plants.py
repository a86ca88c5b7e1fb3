"""
Plant Schemas
=============

Request schemas for plant endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.enums.nutrients import PlantStage


class CreatePlantRequest(BaseModel):
    """Request schema for registering a plant."""

    name: str = Field(..., min_length=1, max_length=100, description="Plant name")
    stage: PlantStage = Field(default=PlantStage.SEEDLING, description="Current growth stage")
    planted_date: datetime | None = Field(default=None, description="Planting date (ISO-8601)")
    harvest_date: datetime | None = Field(default=None, description="Expected harvest date (ISO-8601)")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class UpdatePlantStageRequest(BaseModel):
    stage: PlantStage
