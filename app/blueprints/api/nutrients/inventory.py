"""
Inventory Endpoints
===================

Per-product bottle inventory: ownership, bottle size and remaining volume.
"""

from __future__ import annotations

import logging

from flask import Response
from pydantic import ValidationError

from app.blueprints.api._common import (
    fail as _fail,
    get_inventory_service as _inventory_service,
    get_json as _get_json,
    get_nutrient_service as _nutrient_service,
    success as _success,
)
from app.domain.nutrient_products import get_product_by_id
from app.schemas import InventoryPatch
from app.utils.http import safe_route

from . import nutrients_api

logger = logging.getLogger("nutrients_api.inventory")


@nutrients_api.get("/inventory")
@safe_route("Failed to load inventory")
def list_inventory() -> Response:
    """All products with their stock and weeks-of-supply estimate."""
    week = _nutrient_service().resolve_week()
    service = _inventory_service()
    records = service.list_records()
    usage = {estimate.product_id: estimate for estimate in service.usage(week)}

    items = []
    for product_id, record in records.items():
        item = record.to_dict()
        item["product"] = get_product_by_id(product_id).to_dict()
        item["usage"] = usage[product_id].to_dict()
        items.append(item)
    return _success({"items": items, "count": len(items), "current_week": week})


@nutrients_api.get("/inventory/shopping-list")
@safe_route("Failed to build shopping list")
def get_shopping_list() -> Response:
    """Owned products running below 20 % of their bottle."""
    low = _inventory_service().shopping_list()
    return _success({"items": [record.to_dict() for record in low], "count": len(low)})


@nutrients_api.get("/inventory/<product_id>")
@safe_route("Failed to load inventory record")
def get_inventory_record(product_id: str) -> Response:
    return _success(_inventory_service().get_record(product_id).to_dict())


@nutrients_api.patch("/inventory/<product_id>")
@safe_route("Failed to update inventory")
def update_inventory(product_id: str) -> Response:
    """
    Partially update a record.

    Body: any of ``owned``, ``bottle_size``, ``current_ml``. Changing the
    bottle size alone clamps the remaining volume to the new size.
    """
    try:
        body = InventoryPatch.model_validate(_get_json())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False, include_context=False)})

    record = _inventory_service().update(product_id, body.model_dump(exclude_none=True))
    return _success(record.to_dict())


@nutrients_api.post("/inventory/<product_id>/refill")
@safe_route("Failed to refill product")
def refill_inventory(product_id: str) -> Response:
    record = _inventory_service().refill(product_id)
    logger.info("Refilled %s to %.0f ml", product_id, record.current_ml)
    return _success(record.to_dict())


@nutrients_api.post("/inventory/<product_id>/toggle")
@safe_route("Failed to toggle product")
def toggle_inventory(product_id: str) -> Response:
    record = _inventory_service().toggle(product_id)
    return _success(record.to_dict())
