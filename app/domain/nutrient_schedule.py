"""
BioBizz 16-Week Feeding Schedule
================================

Static schedule table (Light Mix, ml per litre), growth phases and the
helpers that resolve them:

- ``get_schedule_for_week``: clamp the week to 1..16 and return its row
- ``get_phase_for_week``: phase whose week range contains the week
- ``calculate_grow_week``: grow week from a planted date
- ``current_grow_week``: grow week of the oldest active plant

Lookups never raise. Out-of-range weeks are clamped, and the "no match"
branches return the named ``LAST_SCHEDULE_ENTRY`` / ``LAST_PHASE``
defaults.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from app.constants import MAX_GROW_WEEKS, MIN_GROW_WEEK
from app.domain.nutrient_products import PRODUCT_IDS
from app.enums.nutrients import PlantStage
from app.utils.time import coerce_datetime, utc_now


@dataclass(frozen=True)
class EcTarget:
    """EC target range in mS/cm."""

    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class GrowthPhase:
    """A contiguous range of grow weeks."""

    id: str
    label: str
    weeks: tuple[int, ...]
    color: str
    icon: str

    def contains(self, week: int) -> bool:
        return week in self.weeks

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "weeks": list(self.weeks),
            "color": self.color,
            "icon": self.icon,
        }


@dataclass(frozen=True)
class WeeklyScheduleEntry:
    """Dosage per litre for every product in one grow week.

    ``products`` maps product id to ml/L; ``None`` means the product is not
    used that week.
    """

    week: int
    phase: str
    products: Mapping[str, float | None]
    ec_target: EcTarget
    notes: str

    def dose_for(self, product_id: str) -> float | None:
        return self.products.get(product_id)

    def required_product_ids(self) -> list[str]:
        """Products with a positive dose this week, in catalogue order."""
        return [pid for pid in PRODUCT_IDS if (self.products.get(pid) or 0) > 0]

    def to_dict(self) -> dict[str, Any]:
        return {
            "week": self.week,
            "phase": self.phase,
            "products": dict(self.products),
            "ec_target": self.ec_target.to_dict(),
            "notes": self.notes,
        }


def _row(
    week: int,
    phase: str,
    doses: tuple[float | None, ...],
    ec_min: float,
    ec_max: float,
    notes: str,
) -> WeeklyScheduleEntry:
    # doses are listed in catalogue order
    return WeeklyScheduleEntry(
        week=week,
        phase=phase,
        products=MappingProxyType(dict(zip(PRODUCT_IDS, doses))),
        ec_target=EcTarget(ec_min, ec_max),
        notes=notes,
    )


_ = None

# fmt: off
#                         grow bloom tmax root heav acti alga fish cmag
SCHEDULE: tuple[WeeklyScheduleEntry, ...] = (
    _row(1,  "seedling",  (_,   _,    _,   1,   1,   1,   _,   _,   _), 0.3, 0.6,
         "Root stimulation and vitality only. Water very carefully."),
    _row(2,  "seedling",  (_,   _,    _,   2,   2,   2,   1,   _,   _), 0.4, 0.8,
         "Raise the dose slightly. Add Alg-A-Mic for stress protection."),
    _row(3,  "earlyVeg",  (1,   _,    _,   3,   2,   3,   1,   1,   _), 0.6, 1.0,
         "Start Bio-Grow and Fish-Mix. The plant begins active growth."),
    _row(4,  "earlyVeg",  (2,   _,    _,   4,   2,   4,   2,   2,   1), 0.8, 1.2,
         "Add CalMag. Full root stimulation."),
    _row(5,  "lateVeg",   (3,   _,    _,   4,   3,   5,   3,   3,   1), 1.0, 1.4,
         "Maximum vegetative feeding. Strong growth."),
    _row(6,  "lateVeg",   (4,   _,    _,   4,   3,   5,   3,   4,   1), 1.2, 1.6,
         "Vegetative feeding peak. Bio-Grow and Fish-Mix at maximum."),
    _row(7,  "preFlower", (3,   1,    1,   4,   3,   4,   3,   2,   1), 1.2, 1.6,
         "Transition: start Bio-Bloom and Top-Max. Reduce Bio-Grow."),
    _row(8,  "preFlower", (2,   2,    1,   4,   4,   4,   3,   1,   1), 1.2, 1.8,
         "Balance Grow and Bloom. Phase out Fish-Mix."),
    _row(9,  "bloom",     (1,   3,    2,   _,   4,   4,   4,   _,   1), 1.4, 2.0,
         "Full bloom. Stop Root-Juice and Fish-Mix. Increase Bio-Bloom."),
    _row(10, "bloom",     (_,   4,    3,   _,   5,   4,   4,   _,   1), 1.4, 2.0,
         "Bloom feeding peak. Stop Bio-Grow completely."),
    _row(11, "bloom",     (_,   4,    4,   _,   5,   4,   4,   _,   1), 1.4, 2.0,
         "Top-Max at maximum for full flower development."),
    _row(12, "bloom",     (_,   4,    4,   _,   5,   3,   3,   _,   1), 1.2, 1.8,
         "Start tapering. Lower Acti-Vera and Alg-A-Mic slightly."),
    _row(13, "lateBloom", (_,   3,    3,   _,   4,   2,   2,   _,   _), 1.0, 1.4,
         "Reduce feeding. Prepare the plant for harvest."),
    _row(14, "lateBloom", (_,   2,    2,   _,   3,   1,   1,   _,   _), 0.6, 1.0,
         "Last feeding week. Plain water only from next week."),
    _row(15, "flush",     (_,   _,    _,   _,   _,   _,   _,   _,   _), 0.0, 0.4,
         "Clean water only. Flush out remaining nutrients."),
    _row(16, "flush",     (_,   _,    _,   _,   _,   _,   _,   _,   _), 0.0, 0.3,
         "Final flush week. Harvest when trichomes turn milky/amber."),
)
# fmt: on

PHASES: tuple[GrowthPhase, ...] = (
    GrowthPhase("seedling", "Seedling", (1, 2), "#22c55e", "🌱"),
    GrowthPhase("earlyVeg", "Early Veg", (3, 4), "#10b981", "🌿"),
    GrowthPhase("lateVeg", "Late Veg", (5, 6), "#059669", "🪴"),
    GrowthPhase("preFlower", "Pre-Flower", (7, 8), "#f59e0b", "🌼"),
    GrowthPhase("bloom", "Bloom", (9, 10, 11, 12), "#ec4899", "🌸"),
    GrowthPhase("lateBloom", "Late Bloom", (13, 14), "#f43f5e", "🌺"),
    GrowthPhase("flush", "Flush", (15, 16), "#6b7280", "💧"),
)

LAST_SCHEDULE_ENTRY: WeeklyScheduleEntry = SCHEDULE[-1]
LAST_PHASE: GrowthPhase = PHASES[-1]

_SCHEDULE_BY_WEEK: dict[int, WeeklyScheduleEntry] = {entry.week: entry for entry in SCHEDULE}
_PHASES_BY_ID: dict[str, GrowthPhase] = {phase.id: phase for phase in PHASES}


def clamp_week(week: int) -> int:
    return min(max(MIN_GROW_WEEK, int(week)), MAX_GROW_WEEKS)


def get_schedule_for_week(week: int) -> WeeklyScheduleEntry:
    """Schedule row for ``week`` after clamping it to 1..16."""
    entry = _SCHEDULE_BY_WEEK.get(clamp_week(week))
    if entry is None:
        return LAST_SCHEDULE_ENTRY
    return entry


def get_phase_for_week(week: int) -> GrowthPhase:
    """Phase containing ``week``; weeks outside 1..16 resolve to ``LAST_PHASE``."""
    for phase in PHASES:
        if phase.contains(week):
            return phase
    return LAST_PHASE


def get_phase_by_id(phase_id: str) -> GrowthPhase | None:
    return _PHASES_BY_ID.get(phase_id)


def required_products_for_week(week: int) -> list[str]:
    return get_schedule_for_week(week).required_product_ids()


def calculate_grow_week(planted_date: Any, now: datetime | None = None) -> int | None:
    """
    Grow week for a plant planted on ``planted_date``.

    Whole elapsed days are divided by 7 and rounded up, with a floor of 1.
    No upper clamp is applied here.

    Args:
        planted_date: datetime or ISO string; naive values are treated as UTC
        now: Reference time, defaults to the current UTC time

    Returns:
        Week number >= 1, or ``None`` when no usable date is given
    """
    planted = coerce_datetime(planted_date)
    if planted is None:
        return None
    reference = coerce_datetime(now) if now is not None else utc_now()
    elapsed_days = math.floor((reference - planted).total_seconds() / 86400)
    return max(1, math.ceil(elapsed_days / 7))


def is_active_plant(plant: Mapping[str, Any]) -> bool:
    stage = plant.get("stage")
    return bool(stage) and stage not in PlantStage.inactive()


def active_plants(plants: Iterable[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    """Plants that are neither empty slots nor harvested."""
    return [plant for plant in plants if is_active_plant(plant)]


def current_grow_week(plants: Iterable[Mapping[str, Any]], now: datetime | None = None) -> int:
    """
    Grow week of the oldest active plant, capped at 16.

    Defaults to week 1 when there is no active plant with a planted date.
    """
    planted_dates = [
        parsed
        for parsed in (coerce_datetime(p.get("planted_date")) for p in active_plants(plants))
        if parsed is not None
    ]
    if not planted_dates:
        return MIN_GROW_WEEK
    week = calculate_grow_week(min(planted_dates), now=now)
    if week is None:
        return MIN_GROW_WEEK
    return min(week, MAX_GROW_WEEKS)
