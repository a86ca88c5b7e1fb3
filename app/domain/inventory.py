"""
Product Inventory
=================

Per-product stock records and the pure rules that adjust them. Storage is
handled by an injected repository (see ``app/services/protocols.py``); the
functions here only compute new records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping

from app.constants import (
    DEFAULT_BOTTLE_SIZE_ML,
    MAX_GROW_WEEKS,
    REFERENCE_TANK_LITERS,
    AlertThresholds,
)
from app.domain.nutrient_schedule import clamp_week, get_schedule_for_week


@dataclass(frozen=True)
class InventoryRecord:
    product_id: str
    owned: bool = False
    bottle_size: float = DEFAULT_BOTTLE_SIZE_ML
    current_ml: float = 0.0

    @property
    def fill_ratio(self) -> float:
        if self.bottle_size <= 0:
            return 0.0
        return self.current_ml / self.bottle_size

    @property
    def is_low(self) -> bool:
        """Owned and below 20 % of the bottle."""
        return self.owned and self.current_ml < self.bottle_size * AlertThresholds.INVENTORY_LOW_RATIO

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "owned": self.owned,
            "bottle_size": self.bottle_size,
            "current_ml": self.current_ml,
            "fill_percent": round(self.fill_ratio * 100, 1),
            "low": self.is_low,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "InventoryRecord":
        return cls(
            product_id=row["product_id"],
            owned=bool(row.get("owned")),
            bottle_size=float(row.get("bottle_size") or DEFAULT_BOTTLE_SIZE_ML),
            current_ml=float(row.get("current_ml") or 0),
        )


def default_record(product_id: str) -> InventoryRecord:
    """Not owned, 1000 ml bottle, empty."""
    return InventoryRecord(product_id=product_id)


def apply_inventory_update(record: InventoryRecord, patch: Mapping[str, Any]) -> InventoryRecord:
    """
    Merge ``owned``, ``bottle_size`` and ``current_ml`` from ``patch``.

    Fields missing from the patch keep their value. Switching ``owned`` on
    without an explicit ``current_ml`` fills the bottle; switching it off
    empties it. ``current_ml`` never exceeds the bottle size, whether it was
    given explicitly or the bottle shrank.
    """
    owned = bool(patch["owned"]) if patch.get("owned") is not None else record.owned
    bottle_size = float(patch["bottle_size"]) if patch.get("bottle_size") is not None else record.bottle_size
    explicit_ml = patch.get("current_ml")
    current_ml = float(explicit_ml) if explicit_ml is not None else record.current_ml

    if owned and not record.owned and explicit_ml is None:
        current_ml = bottle_size
    elif record.owned and not owned:
        current_ml = 0.0

    current_ml = min(current_ml, bottle_size)
    return replace(record, owned=owned, bottle_size=bottle_size, current_ml=current_ml)


def toggle_owned(record: InventoryRecord) -> InventoryRecord:
    return apply_inventory_update(record, {"owned": not record.owned})


def refill(record: InventoryRecord) -> InventoryRecord:
    """Full bottle."""
    return replace(record, current_ml=record.bottle_size)


def consume(record: InventoryRecord, amount_ml: float) -> InventoryRecord:
    """Take ``amount_ml`` out of an owned bottle, never below zero."""
    if not record.owned or amount_ml <= 0:
        return record
    return replace(record, current_ml=max(0.0, round(record.current_ml - amount_ml, 1)))


@dataclass(frozen=True)
class UsageEstimate:
    product_id: str
    current_week: int
    total_remaining_ml: float
    per_week_ml: float
    weeks_left: float

    @property
    def unlimited(self) -> bool:
        return math.isinf(self.weeks_left)

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "current_week": self.current_week,
            "total_remaining_ml": round(self.total_remaining_ml, 1),
            "per_week_ml": round(self.per_week_ml, 1),
            # JSON has no infinity
            "weeks_left": None if self.unlimited else int(self.weeks_left),
            "unlimited": self.unlimited,
        }


def estimate_weekly_usage(record: InventoryRecord, current_week: int) -> UsageEstimate:
    """
    Remaining demand for a product, assuming a 10 L reference tank.

    Demand is summed over ``current_week``..16; the per-week burn rate is that
    demand spread over the remaining weeks, and weeks of supply is
    ``floor(current_ml / per_week)`` (infinite when nothing is needed).
    """
    week = clamp_week(current_week)
    weeks = range(week, MAX_GROW_WEEKS + 1)
    total = sum((get_schedule_for_week(w).dose_for(record.product_id) or 0) * REFERENCE_TANK_LITERS for w in weeks)
    per_week = total / len(weeks)
    if per_week > 0:
        weeks_left: float = math.floor(record.current_ml / per_week)
    else:
        weeks_left = math.inf
    return UsageEstimate(
        product_id=record.product_id,
        current_week=week,
        total_remaining_ml=total,
        per_week_ml=per_week,
        weeks_left=weeks_left,
    )


def shopping_list(records: Iterable[InventoryRecord]) -> list[InventoryRecord]:
    """Owned products below 20 % of their bottle."""
    return [record for record in records if record.is_low]
