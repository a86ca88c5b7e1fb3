"""
Domain Package
==============
Pure dosing-engine logic: the BioBizz catalogue and 16-week schedule, the
dosage calculator, sensor status classification, recommendations and
inventory arithmetic.

Everything here is immutable data plus side-effect-free functions; storage
and HTTP live in ``infrastructure`` and ``app.blueprints``.
"""

from .dosage_calculator import DosagePlan, ProductDose, calculate_dosage
from .inventory import InventoryRecord, UsageEstimate
from .nutrient_products import PRODUCTS, Product, get_product_by_id
from .nutrient_schedule import (
    PHASES,
    SCHEDULE,
    EcTarget,
    GrowthPhase,
    WeeklyScheduleEntry,
    calculate_grow_week,
    get_phase_for_week,
    get_schedule_for_week,
)
from .recommendations import Recommendation, generate_recommendations
from .sensor_status import SensorSnapshot, StatusResult

__all__ = [
    # Catalogue & schedule
    "PHASES",
    "PRODUCTS",
    "SCHEDULE",
    "EcTarget",
    "GrowthPhase",
    "Product",
    "WeeklyScheduleEntry",
    "calculate_grow_week",
    "get_phase_for_week",
    "get_product_by_id",
    "get_schedule_for_week",
    # Dosage
    "DosagePlan",
    "ProductDose",
    "calculate_dosage",
    # Status & recommendations
    "Recommendation",
    "SensorSnapshot",
    "StatusResult",
    "generate_recommendations",
    # Inventory
    "InventoryRecord",
    "UsageEstimate",
]
