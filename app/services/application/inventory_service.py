"""
Inventory Service
=================
Application-level service for the BioBizz product inventory.

Responsibilities:
- Serve a record for every catalogue product (defaults for unsaved ones)
- Validate and merge partial updates, toggle ownership, refill bottles
- Deduct the amounts of a logged dose from owned bottles
- Weeks-of-supply estimates and the shopping list
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Mapping

from app.constants import DEFAULT_BOTTLE_SIZE_ML
from app.domain.exceptions import NotFoundError, ValidationError
from app.domain.inventory import (
    InventoryRecord,
    UsageEstimate,
    apply_inventory_update,
    consume,
    default_record,
    estimate_weekly_usage,
    refill,
    shopping_list,
    toggle_owned,
)
from app.domain.nutrient_products import PRODUCT_IDS, is_known_product

if TYPE_CHECKING:
    from app.domain.dosage_calculator import DosagePlan
    from app.services.protocols import InventoryStore
    from infrastructure.logging.audit import AuditLogger

logger = logging.getLogger(__name__)

_PATCH_FIELDS = ("owned", "bottle_size", "current_ml")


class InventoryService:
    """Read-modify-write access to per-product inventory records."""

    def __init__(
        self,
        store: "InventoryStore",
        audit_logger: "AuditLogger" | None = None,
        default_bottle_size: float = DEFAULT_BOTTLE_SIZE_ML,
    ) -> None:
        self._store = store
        self._audit = audit_logger
        self._default_bottle_size = float(default_bottle_size)

    # ── Reads ────────────────────────────────────────────────────────

    def _require_product(self, product_id: str) -> None:
        if not is_known_product(product_id):
            raise NotFoundError(f"Unknown product '{product_id}'", detail={"product_id": product_id})

    def _default(self, product_id: str) -> InventoryRecord:
        return replace(default_record(product_id), bottle_size=self._default_bottle_size)

    def get_record(self, product_id: str) -> InventoryRecord:
        self._require_product(product_id)
        return self._store.get(product_id) or self._default(product_id)

    def list_records(self) -> dict[str, InventoryRecord]:
        """One record per catalogue product, in catalogue order."""
        stored = self._store.list_all()
        return {pid: stored.get(pid) or self._default(pid) for pid in PRODUCT_IDS}

    # ── Writes ───────────────────────────────────────────────────────

    def update(self, product_id: str, patch: Mapping[str, Any]) -> InventoryRecord:
        """
        Merge a partial update into the product's record.

        Raises:
            NotFoundError: Unknown product id
            ValidationError: Negative volume or non-positive bottle size
        """
        current = self.get_record(product_id)
        cleaned = {key: patch[key] for key in _PATCH_FIELDS if patch.get(key) is not None}
        if "bottle_size" in cleaned and float(cleaned["bottle_size"]) <= 0:
            raise ValidationError("bottle_size must be greater than 0", detail={"product_id": product_id})
        if "current_ml" in cleaned and float(cleaned["current_ml"]) < 0:
            raise ValidationError("current_ml must not be negative", detail={"product_id": product_id})

        updated = apply_inventory_update(current, cleaned)
        self._save(updated, action="inventory.update", changes=cleaned)
        return updated

    def toggle(self, product_id: str) -> InventoryRecord:
        updated = toggle_owned(self.get_record(product_id))
        self._save(updated, action="inventory.toggle", owned=updated.owned)
        return updated

    def refill(self, product_id: str) -> InventoryRecord:
        updated = refill(self.get_record(product_id))
        self._save(updated, action="inventory.refill", current_ml=updated.current_ml)
        return updated

    def consume_plan(self, plan: "DosagePlan") -> list[InventoryRecord]:
        """Deduct each product total of ``plan`` from owned bottles."""
        changed: list[InventoryRecord] = []
        for dose in plan.products:
            record = self.get_record(dose.product.id)
            updated = consume(record, dose.total_ml)
            if updated != record:
                self._store.upsert(updated)
                changed.append(updated)
        if changed:
            logger.info("Consumed stock for %d products (week %s)", len(changed), plan.schedule_week)
        return changed

    def _save(self, record: InventoryRecord, *, action: str, **meta: Any) -> None:
        self._store.upsert(record)
        logger.info("Inventory %s -> %s", record.product_id, action)
        if self._audit is not None:
            self._audit.log_event("user", action, record.product_id, "success", **meta)

    # ── Estimates ────────────────────────────────────────────────────

    def usage(self, current_week: int) -> list[UsageEstimate]:
        return [estimate_weekly_usage(record, current_week) for record in self.list_records().values()]

    def shopping_list(self) -> list[InventoryRecord]:
        return shopping_list(self.list_records().values())
