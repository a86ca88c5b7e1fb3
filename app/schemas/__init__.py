"""
Schemas Module
==============

This module provides Pydantic models for request/response validation.
Schemas ensure data integrity and provide automatic validation.
"""

from app.schemas.common import ErrorResponse, SuccessResponse
from app.schemas.nutrients import (
    DosageQuery,
    InventoryPatch,
    LogDoseRequest,
    LogsQuery,
    RecommendationRequest,
    ReservoirState,
    StatsQuery,
    StatusQuery,
    TelemetryPayload,
)
from app.schemas.plants import CreatePlantRequest, UpdatePlantStageRequest

__all__ = [
    "CreatePlantRequest",
    "DosageQuery",
    "ErrorResponse",
    "InventoryPatch",
    "LogDoseRequest",
    "LogsQuery",
    "RecommendationRequest",
    "ReservoirState",
    "StatsQuery",
    "StatusQuery",
    "SuccessResponse",
    "TelemetryPayload",
    "UpdatePlantStageRequest",
]
