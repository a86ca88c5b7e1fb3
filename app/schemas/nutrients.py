"""
Nutrient Schemas
================

Request schemas for the dosing engine endpoints. Query-string models are
validated with ``Model.model_validate(request.args.to_dict())``.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.constants import DosingLimits, Pagination
from app.enums.nutrients import DosageStatus, DosageTrigger


class DosageQuery(BaseModel):
    """Query parameters for a dosage calculation."""

    liters: float = Field(
        ...,
        ge=DosingLimits.MIN_TANK_LITERS,
        le=DosingLimits.MAX_TANK_LITERS,
        description="Tank volume in litres",
    )
    week: int | None = Field(default=None, description="Grow week, defaults to the current week")
    substrate: str | None = Field(default=None, description="lightMix, allMix or cocoMix")

    model_config = ConfigDict(
        json_schema_extra={"example": {"liters": 10, "week": 6, "substrate": "lightMix"}}
    )


class StatusQuery(BaseModel):
    """Live readings to classify. A missing or zero value means no reading."""

    ec: float = Field(default=0.0, description="EC in mS/cm")
    ph: float = Field(default=0.0)
    temp: float = Field(default=0.0, description="Water temperature in °C")
    soil: float = Field(default=0.0, description="Soil moisture in percent")
    tank: float = Field(default=0.0, description="Tank level in percent")
    week: int | None = Field(default=None)


class ReservoirReadings(BaseModel):
    ec: float | None = None
    ph: float | None = None
    temp: float | None = None

    model_config = ConfigDict(extra="allow")


class ReservoirState(BaseModel):
    """Reservoir state; ``main`` backs up missing telemetry readings."""

    main: ReservoirReadings | None = None

    model_config = ConfigDict(extra="allow")


class TelemetryPayload(BaseModel):
    """
    Latest device telemetry, keyed the way the controller publishes it.

    Missing or zero readings mean no data. ``tankLevel`` is the raw ADC value
    used when ``reservoirLevel_percent`` is absent.
    """

    ec: float | None = Field(default=None, description="EC in mS/cm")
    ph: float | None = None
    temp: float | None = Field(default=None, description="Water temperature in °C")
    reservoirLevel_percent: float | None = Field(default=None, description="Tank level in percent")
    tankLevel: float | None = Field(default=None, description="Raw tank level ADC reading")
    soil: list[float | None] | None = Field(default=None, description="Soil moisture per slot in percent")
    pumpRunning: bool | None = None
    progress_percent: float | None = None

    model_config = ConfigDict(extra="allow")


class RecommendationRequest(BaseModel):
    """Telemetry payload for the recommendation engine."""

    telemetry: TelemetryPayload = Field(default_factory=TelemetryPayload, description="Latest device telemetry")
    reservoir: ReservoirState | None = Field(default=None, description="Reservoir state fallback")
    plants: list[dict[str, Any]] | None = Field(default=None, description="Overrides the stored plants")
    week: int | None = Field(default=None)
    now: datetime | None = Field(default=None, description="Reference time for the harvest window")


class InventoryPatch(BaseModel):
    """Partial inventory update."""

    owned: bool | None = None
    bottle_size: float | None = Field(default=None, gt=0, description="Bottle size in ml")
    current_ml: float | None = Field(default=None, ge=0, description="Remaining volume in ml")

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def require_field(self) -> "InventoryPatch":
        if self.owned is None and self.bottle_size is None and self.current_ml is None:
            raise ValueError("At least one of owned, bottle_size or current_ml is required")
        return self


class LogDoseRequest(BaseModel):
    """Body for recording a dose."""

    water_liters: float = Field(..., ge=DosingLimits.MIN_TANK_LITERS, le=DosingLimits.MAX_TANK_LITERS)
    week: int | None = None
    substrate: str | None = None
    status: DosageStatus = DosageStatus.SUCCESS
    triggered_by: DosageTrigger = DosageTrigger.MANUAL
    ec_before: float | None = Field(default=None, ge=0)
    ph_before: float | None = Field(default=None, ge=0, le=14)
    ec_after: float | None = Field(default=None, ge=0)
    ph_after: float | None = Field(default=None, ge=0, le=14)
    notes: str | None = Field(default=None, max_length=500)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"water_liters": 10, "week": 6, "substrate": "lightMix", "ec_before": 0.4, "ph_before": 6.3}
        }
    )


class LogsQuery(BaseModel):
    limit: int | None = Field(default=None, ge=1, le=Pagination.MAX_PAGE_SIZE)
    page: int | None = Field(default=None, ge=1)
    start: datetime | None = None
    end: datetime | None = None


class StatsQuery(BaseModel):
    start: datetime | None = None
    end: datetime | None = None
