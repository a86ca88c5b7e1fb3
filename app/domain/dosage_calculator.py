"""
Dosage Calculator Domain Service
================================
Computes the BioBizz nutrient amounts for a tank of water in a given grow
week and substrate.

Formula (per product with a positive dose this week):
    adjusted_ml_per_liter = round1(schedule_ml_per_liter * substrate_modifier)
    total_ml = round1(adjusted_ml_per_liter * water_liters)

The plan total is the rounded sum of the already rounded product totals.
Rounding is half-up to one decimal place.

Usage:
    plan = calculate_dosage(10, week=3, substrate="cocoMix")
    plan.total_ml  # -> 121.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from app.constants import SubstrateConfig
from app.domain.nutrient_products import PRODUCTS, Product
from app.domain.nutrient_schedule import (
    EcTarget,
    GrowthPhase,
    get_phase_for_week,
    get_schedule_for_week,
)


def round1(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


@dataclass(frozen=True)
class ProductDose:
    """Computed amount of one product for the tank."""

    product: Product
    ml_per_liter: float
    total_ml: float

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.product.to_dict(),
            "ml_per_liter": self.ml_per_liter,
            "total_ml": self.total_ml,
        }


@dataclass(frozen=True)
class DosagePlan:
    """Result of a dosage calculation."""

    week: int
    schedule_week: int
    substrate: str
    modifier: float
    water_liters: float
    phase: GrowthPhase
    products: tuple[ProductDose, ...] = field(default_factory=tuple)
    total_ml: float = 0.0
    ec_target: EcTarget | None = None
    notes: str = ""

    def dose_for(self, product_id: str) -> ProductDose | None:
        for dose in self.products:
            if dose.product.id == product_id:
                return dose
        return None

    @property
    def concentration_ml_per_liter(self) -> float:
        if not self.water_liters:
            return 0.0
        return round(self.total_ml / self.water_liters, 2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "week": self.week,
            "schedule_week": self.schedule_week,
            "substrate": self.substrate,
            "modifier": self.modifier,
            "water_liters": self.water_liters,
            "phase": self.phase.to_dict(),
            "products": [dose.to_dict() for dose in self.products],
            "total_ml": self.total_ml,
            "ec_target": self.ec_target.to_dict() if self.ec_target else None,
            "notes": self.notes,
        }


def calculate_dosage(water_liters: float, week: int, substrate: str = SubstrateConfig.DEFAULT_KEY) -> DosagePlan:
    """
    Build the dosage plan for a tank.

    ``water_liters`` is not validated here; zero or negative volumes give
    zero or negative totals. Unknown substrates use a modifier of 1.0.
    Out-of-range weeks are clamped by the schedule lookup, while the phase
    comes from the requested week and so falls back to ``LAST_PHASE``.

    Args:
        water_liters: Tank volume in litres
        week: Grow week
        substrate: Substrate key (``lightMix``, ``allMix``, ``cocoMix``)

    Returns:
        DosagePlan with products listed in catalogue order
    """
    schedule = get_schedule_for_week(week)
    phase = get_phase_for_week(week)
    modifier = SubstrateConfig.modifier_for(substrate)

    doses: list[ProductDose] = []
    running_total = 0.0
    for product in PRODUCTS:
        raw_ml = schedule.dose_for(product.id)
        if raw_ml is None or raw_ml <= 0:
            continue
        adjusted = round1(raw_ml * modifier)
        product_total = round1(adjusted * water_liters)
        running_total += product_total
        doses.append(ProductDose(product=product, ml_per_liter=adjusted, total_ml=product_total))

    return DosagePlan(
        week=week,
        schedule_week=schedule.week,
        substrate=substrate,
        modifier=modifier,
        water_liters=water_liters,
        phase=phase,
        products=tuple(doses),
        total_ml=round1(running_total),
        ec_target=schedule.ec_target,
        notes=schedule.notes,
    )
