"""
Dosing Log Endpoints
====================

Record doses, page through the history and aggregate statistics.
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
from app.schemas import LogDoseRequest, LogsQuery, StatsQuery
from app.utils.http import safe_route

from . import nutrients_api

logger = logging.getLogger("nutrients_api.logs")


@nutrients_api.post("/logs")
@safe_route("Failed to log dose")
def log_dose() -> Response:
    """
    Record a dose. The dosage plan is computed server-side and successful
    doses are deducted from owned bottles.
    """
    try:
        body = LogDoseRequest.model_validate(_get_json())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False, include_context=False)})

    entry = _nutrient_service().log_dose(
        body.water_liters,
        week=body.week,
        substrate=body.substrate,
        status=body.status,
        triggered_by=body.triggered_by,
        ec_before=body.ec_before,
        ph_before=body.ph_before,
        ec_after=body.ec_after,
        ph_after=body.ph_after,
        notes=body.notes,
    )
    return _success(entry, 201)


@nutrients_api.get("/logs")
@safe_route("Failed to list dosing logs")
def list_logs() -> Response:
    """
    Newest-first dosing history.

    Query params: limit (default 50), page (default 1), start, end (ISO-8601)
    """
    try:
        query = LogsQuery.model_validate(_get_query())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False, include_context=False)})

    page = _nutrient_service().list_logs(limit=query.limit, page=query.page, start=query.start, end=query.end)
    return _success(page.to_dict())


@nutrients_api.get("/logs/<int:log_id>")
@safe_route("Failed to load dosing log")
def get_log(log_id: int) -> Response:
    return _success(_nutrient_service().get_log(log_id))


@nutrients_api.get("/stats")
@safe_route("Failed to compute dosing statistics")
def get_stats() -> Response:
    """Statistics over successful doses, last 30 days unless start/end are given."""
    try:
        query = StatsQuery.model_validate(_get_query())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False, include_context=False)})

    return _success(_nutrient_service().stats(start=query.start, end=query.end))
