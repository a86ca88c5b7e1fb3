"""
Nutrient Catalogue Endpoints
============================

Read-only reference data: products, growth phases, the 16-week schedule and
substrate modifiers, plus the current grow context.
"""

from __future__ import annotations

import logging

from flask import Response

from app.blueprints.api._common import (
    get_nutrient_service as _nutrient_service,
    success as _success,
)
from app.constants import BOTTLE_SIZES_ML, SubstrateConfig
from app.domain.nutrient_products import PRODUCTS
from app.domain.nutrient_schedule import PHASES, SCHEDULE, get_phase_for_week, get_schedule_for_week
from app.utils.http import safe_route

from . import nutrients_api

logger = logging.getLogger("nutrients_api.catalog")


@nutrients_api.get("/products")
@safe_route("Failed to list products")
def list_products() -> Response:
    """All BioBizz products in catalogue order."""
    return _success(
        {
            "products": [product.to_dict() for product in PRODUCTS],
            "count": len(PRODUCTS),
            "bottle_sizes_ml": list(BOTTLE_SIZES_ML),
        }
    )


@nutrients_api.get("/phases")
@safe_route("Failed to list phases")
def list_phases() -> Response:
    return _success({"phases": [phase.to_dict() for phase in PHASES]})


@nutrients_api.get("/schedule")
@safe_route("Failed to load schedule")
def get_schedule() -> Response:
    """The full 16-week Light Mix schedule."""
    return _success({"weeks": [entry.to_dict() for entry in SCHEDULE], "count": len(SCHEDULE)})


@nutrients_api.get("/schedule/<int(signed=True):week>")
@safe_route("Failed to load schedule week")
def get_schedule_week(week: int) -> Response:
    """Schedule row for a week; out-of-range weeks are clamped to 1..16."""
    entry = get_schedule_for_week(week)
    return _success(
        {
            "requested_week": week,
            "schedule": entry.to_dict(),
            "phase": get_phase_for_week(entry.week).to_dict(),
        }
    )


@nutrients_api.get("/substrates")
@safe_route("Failed to list substrates")
def list_substrates() -> Response:
    return _success(
        {
            "substrates": [substrate.to_dict() for substrate in SubstrateConfig.list_all()],
            "default": SubstrateConfig.DEFAULT_KEY,
        }
    )


@nutrients_api.get("/context")
@safe_route("Failed to resolve grow context")
def get_grow_context() -> Response:
    """Current grow week (oldest active plant), phase and schedule row."""
    context = _nutrient_service().grow_context()
    logger.debug("Grow context resolved to week %s", context["current_week"])
    return _success(context)
