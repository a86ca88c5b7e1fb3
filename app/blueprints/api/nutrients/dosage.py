"""
Dosage, Status and Recommendation Endpoints
===========================================
"""

from __future__ import annotations

import logging

from flask import Response
from pydantic import ValidationError

from app.blueprints.api._common import (
    fail as _fail,
    get_json as _get_json,
    get_nutrient_service as _nutrient_service,
    get_query as _get_query,
    success as _success,
)
from app.domain.sensor_status import SensorSnapshot
from app.schemas import DosageQuery, RecommendationRequest, StatusQuery
from app.utils.http import safe_route

from . import nutrients_api

logger = logging.getLogger("nutrients_api.dosage")


@nutrients_api.get("/dosage")
@safe_route("Failed to calculate dosage")
def calculate_dosage() -> Response:
    """
    Nutrient amounts for a tank.

    Query params:
        liters: Tank volume in litres (1..100, required)
        week: Grow week, defaults to the current week
        substrate: lightMix | allMix | cocoMix (others use modifier 1.0)
    """
    try:
        query = DosageQuery.model_validate(_get_query())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False, include_context=False)})

    plan = _nutrient_service().calculate(query.liters, week=query.week, substrate=query.substrate)
    logger.info("Dosage for %.1f L week %s (%s): %.1f ml", plan.water_liters, plan.week, plan.substrate, plan.total_ml)
    return _success(plan.to_dict())


@nutrients_api.get("/status")
@safe_route("Failed to classify readings")
def get_status() -> Response:
    """Per-dimension status of live readings. Missing or zero values are "No data"."""
    try:
        query = StatusQuery.model_validate(_get_query())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False, include_context=False)})

    snapshot = SensorSnapshot(
        ec=query.ec,
        ph=query.ph,
        temp=query.temp,
        soil_moisture=query.soil,
        tank_level=query.tank,
    )
    statuses = _nutrient_service().status(snapshot, week=query.week)
    return _success(
        {
            "readings": snapshot.to_dict(),
            "status": {key: result.to_dict() for key, result in statuses.items()},
        }
    )


@nutrients_api.post("/recommendations")
@safe_route("Failed to generate recommendations")
def get_recommendations() -> Response:
    """
    Ordered recommendations for a telemetry payload.

    Body:
        telemetry: {"ec", "ph", "temp", "reservoirLevel_percent" | "tankLevel", "soil": [...]}
        reservoir: {"main": {...}} fallback for ec/ph/temp
        plants: optional plant list overriding the stored plants
        week: optional grow week override
    """
    try:
        body = RecommendationRequest.model_validate(_get_json())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False, include_context=False)})

    snapshot = SensorSnapshot.from_telemetry(
        body.telemetry.model_dump(),
        body.reservoir.model_dump() if body.reservoir is not None else None,
    )
    recs = _nutrient_service().recommendations(snapshot, plants=body.plants, week=body.week, now=body.now)
    return _success(
        {
            "recommendations": [rec.to_dict() for rec in recs],
            "count": len(recs),
            "readings": snapshot.to_dict(),
        }
    )
