"""
Plant CRUD Operations
=====================

Endpoints for listing, registering and re-staging plants.
"""

from __future__ import annotations

import logging

from flask import Response
from pydantic import ValidationError

from app.blueprints.api._common import (
    fail as _fail,
    get_json as _get_json,
    get_plant_service as _plant_service,
    success as _success,
)
from app.schemas import CreatePlantRequest, UpdatePlantStageRequest
from app.utils.http import safe_route

from . import plants_api

logger = logging.getLogger("plants_api.crud")


@plants_api.get("")
@safe_route("Failed to list plants")
def list_plants() -> Response:
    """List all plants with their grow week"""
    plants = _plant_service().list_plants_as_dicts()
    logger.info("Found %s plants", len(plants))
    return _success({"plants": plants, "count": len(plants)})


@plants_api.post("")
@safe_route("Failed to add plant")
def add_plant() -> Response:
    """Register a new plant"""
    try:
        body = CreatePlantRequest.model_validate(_get_json())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False, include_context=False)})

    plant = _plant_service().create_plant(
        name=body.name,
        stage=body.stage,
        planted_date=body.planted_date,
        harvest_date=body.harvest_date,
    )
    return _success(plant, 201)


@plants_api.get("/<int:plant_id>")
@safe_route("Failed to get plant")
def get_plant(plant_id: int) -> Response:
    return _success(_plant_service().get_plant(plant_id))


@plants_api.put("/<int:plant_id>/stage")
@safe_route("Failed to update plant stage")
def update_plant_stage(plant_id: int) -> Response:
    """Move a plant to another growth stage"""
    try:
        body = UpdatePlantStageRequest.model_validate(_get_json())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False, include_context=False)})

    plant = _plant_service().update_stage(plant_id, body.stage)
    return _success(plant)
