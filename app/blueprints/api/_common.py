"""
Blueprint Common Utilities
==========================

Shared helper functions for all API blueprints.
Import these instead of duplicating helper code in each blueprint.

Usage:
    from app.blueprints.api._common import (
        get_container, get_json, success, fail,
        get_nutrient_service, get_inventory_service, ...
    )

This module centralizes:
- Service container access
- Request JSON parsing
- Standardized response helpers
- Common service accessors
"""
from __future__ import annotations

import logging
from typing import Any

from flask import current_app, request

from app.utils.http import error_response, success_response

logger = logging.getLogger("api._common")

# ============================================================================
# CONTAINER ACCESS
# ============================================================================


def get_container():
    """
    Get the service container from Flask app config.

    Returns:
        ServiceContainer: The application service container

    Raises:
        RuntimeError: If container is not configured
    """
    container = current_app.config.get("CONTAINER")
    if not container:
        raise RuntimeError("ServiceContainer not found in app config")
    return container


# ============================================================================
# REQUEST HELPERS
# ============================================================================


def get_json() -> dict:
    """
    Get JSON request body with silent failure.

    Returns:
        dict: Parsed JSON body or empty dict if not available
    """
    return request.get_json(silent=True) or {}


def get_query() -> dict[str, Any]:
    """Query string as a flat dict, blank values dropped."""
    return {key: value for key, value in request.args.items() if value != ""}


# ============================================================================
# RESPONSE HELPERS
# ============================================================================


def success(data: dict | list | None = None, status: int = 200, *, message: str | None = None):
    """
    Standard success response wrapper.

    Returns:
        Flask Response with format: {"ok": true, "data": ..., "error": null}
    """
    return success_response(data, status, message=message)


def fail(message: str, status: int = 400, *, details: dict | None = None):
    """
    Standard error response wrapper.

    Returns:
        Flask Response with format: {"ok": false, "data": null, "error": {...}}
    """
    return error_response(message, status, details=details)


# ============================================================================
# SERVICE ACCESSORS
# ============================================================================


def get_nutrient_service():
    """
    Get nutrient service from container.

    Raises:
        RuntimeError: If service not available
    """
    container = get_container()
    if not getattr(container, "nutrient_service", None):
        raise RuntimeError("Nutrient service not available")
    return container.nutrient_service


def get_inventory_service():
    """
    Get inventory service from container.

    Raises:
        RuntimeError: If service not available
    """
    container = get_container()
    if not getattr(container, "inventory_service", None):
        raise RuntimeError("Inventory service not available")
    return container.inventory_service


def get_plant_service():
    """
    Get plant service from container.

    Raises:
        RuntimeError: If service not available
    """
    container = get_container()
    if not getattr(container, "plant_service", None):
        raise RuntimeError("Plant service not available")
    return container.plant_service


def get_database():
    container = get_container()
    if not getattr(container, "database", None):
        raise RuntimeError("Database not available")
    return container.database
