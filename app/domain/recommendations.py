"""
Recommendation Engine
=====================

Rule-based, priority-ordered advice derived from the current readings,
active plants, the week's schedule and the product inventory.

Rules are evaluated independently, so several can fire at once. The result
is stable-sorted by priority rank (critical, warning, info); within a rank
the generation order below is kept:

1. EC high / low
2. pH low / high
3. harvest within 14 days before the flush has started
4. tank below 20 %
5. average soil moisture below 30 %
6. scheduled products that are owned and below 20 % of the bottle
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping

from app.constants import FLUSH_START_WEEK, AlertThresholds, FeedingRules
from app.domain.inventory import InventoryRecord
from app.domain.nutrient_products import get_product_by_id
from app.domain.nutrient_schedule import WeeklyScheduleEntry, is_active_plant
from app.enums.nutrients import (
    EcLevel,
    PhLevel,
    RecommendationAction,
    RecommendationPriority,
    RecommendationType,
)
from app.utils.time import coerce_datetime, utc_now


@dataclass(frozen=True)
class Recommendation:
    id: str
    priority: RecommendationPriority
    type: RecommendationType
    title: str
    message: str
    action: RecommendationAction | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "priority": str(self.priority),
            "type": str(self.type),
            "title": self.title,
            "message": self.message,
            "action": str(self.action) if self.action else None,
        }


def _ph_target_text() -> str:
    return f"{FeedingRules.PH_TARGET_MIN}-{FeedingRules.PH_TARGET_MAX}"


def _harvest_soon(plants: Iterable[Mapping[str, Any]], now: datetime) -> bool:
    for plant in plants:
        if not is_active_plant(plant):
            continue
        harvest = coerce_datetime(plant.get("harvest_date"))
        if harvest is None:
            continue
        days_to_harvest = (harvest - now).total_seconds() / 86400
        if 0 < days_to_harvest <= AlertThresholds.HARVEST_WINDOW_DAYS:
            return True
    return False


def generate_recommendations(
    ec_status: EcLevel,
    ph_status: PhLevel,
    current_ec: float | None,
    current_ph: float | None,
    tank_level: float | None,
    avg_soil_moisture: float | None,
    active_plants: Iterable[Mapping[str, Any]],
    current_week: int,
    current_schedule: WeeklyScheduleEntry | None,
    inventory: Mapping[str, InventoryRecord],
    now: datetime | None = None,
) -> list[Recommendation]:
    """
    Build the ordered recommendation list.

    Args:
        ec_status: EC alert level (see ``ec_alert_level``)
        ph_status: pH alert level (see ``ph_alert_level``)
        current_ec: EC reading used in the message text
        current_ph: pH reading used in the message text
        tank_level: Tank level in percent, 0 means no reading
        avg_soil_moisture: Mean soil moisture in percent, 0 means no reading
        active_plants: Plant dicts with ``stage`` and ``harvest_date``
        current_week: Grow week
        current_schedule: Schedule row of the current week
        inventory: Records keyed by product id
        now: Reference time for the harvest window
    """
    now = coerce_datetime(now) if now is not None else utc_now()
    recs: list[Recommendation] = []

    if ec_status == EcLevel.HIGH:
        recs.append(
            Recommendation(
                id="ec-high",
                priority=RecommendationPriority.CRITICAL,
                type=RecommendationType.EC,
                title="EC too high",
                message=f"EC {current_ec or 0:.2f} mS/cm is above the target range. Flush or dilute the tank.",
                action=RecommendationAction.FLUSH,
            )
        )
    elif ec_status == EcLevel.LOW:
        recs.append(
            Recommendation(
                id="ec-low",
                priority=RecommendationPriority.WARNING,
                type=RecommendationType.EC,
                title="EC too low",
                message=f"EC {current_ec or 0:.2f} mS/cm is below the target range. Increase feeding.",
                action=RecommendationAction.FEED,
            )
        )

    if ph_status in (PhLevel.LOW, PhLevel.WARNING_LOW):
        recs.append(
            Recommendation(
                id="ph-low",
                priority=RecommendationPriority.CRITICAL if ph_status == PhLevel.LOW else RecommendationPriority.WARNING,
                type=RecommendationType.PH,
                title="pH too low",
                message=f"pH {current_ph or 0:.1f}, target range is {_ph_target_text()}. Use pH Up.",
                action=RecommendationAction.PH_CORRECT,
            )
        )
    elif ph_status in (PhLevel.HIGH, PhLevel.WARNING_HIGH):
        recs.append(
            Recommendation(
                id="ph-high",
                priority=RecommendationPriority.CRITICAL if ph_status == PhLevel.HIGH else RecommendationPriority.WARNING,
                type=RecommendationType.PH,
                title="pH too high",
                message=f"pH {current_ph or 0:.1f}, target range is {_ph_target_text()}. Use pH Down.",
                action=RecommendationAction.PH_CORRECT,
            )
        )

    if current_week < FLUSH_START_WEEK and _harvest_soon(active_plants, now):
        recs.append(
            Recommendation(
                id="flush-soon",
                priority=RecommendationPriority.WARNING,
                type=RecommendationType.PHASE,
                title="Start flushing soon",
                message="Harvest is less than 2 weeks away. Start the flush phase (plain water only).",
                action=RecommendationAction.FLUSH,
            )
        )

    if tank_level and 0 < tank_level < AlertThresholds.TANK_LOW_PERCENT:
        recs.append(
            Recommendation(
                id="tank-low",
                priority=RecommendationPriority.WARNING,
                type=RecommendationType.TANK,
                title="Tank almost empty",
                message=f"Tank level only {tank_level:g}%. Please refill.",
                action=RecommendationAction.REFILL,
            )
        )

    if avg_soil_moisture and 0 < avg_soil_moisture < AlertThresholds.SOIL_DRY_PERCENT:
        recs.append(
            Recommendation(
                id="soil-dry",
                priority=RecommendationPriority.INFO,
                type=RecommendationType.SOIL,
                title="Soil is dry",
                message=f"Average soil moisture at {avg_soil_moisture:g}%. Watering recommended.",
                action=RecommendationAction.WATER,
            )
        )

    if current_schedule is not None:
        for product_id, ml_per_liter in current_schedule.products.items():
            record = inventory.get(product_id)
            if not ml_per_liter or record is None or not record.is_low:
                continue
            product = get_product_by_id(product_id)
            name = product.name if product else product_id
            recs.append(
                Recommendation(
                    id=f"inv-low-{product_id}",
                    priority=RecommendationPriority.INFO,
                    type=RecommendationType.INVENTORY,
                    title=f"{name} running low",
                    message=f"Only {record.current_ml:g} ml left. Reorder recommended.",
                    action=RecommendationAction.RESTOCK,
                )
            )

    return sorted(recs, key=lambda rec: rec.priority.rank)
