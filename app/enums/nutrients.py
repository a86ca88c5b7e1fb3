"""
Nutrient Enumerations
=====================

Enums for the BioBizz dosing model: product categories, sensor statuses,
alert levels, recommendations and dosing log entries.
"""

from enum import Enum


class ProductCategory(str, Enum):
    """BioBizz product line category."""

    BASIS = "Basis"
    STIMULATOR = "Stimulator"
    BOOSTER = "Booster"
    SUPPLEMENT = "Supplement"

    def __str__(self) -> str:
        return self.value


class SensorStatus(str, Enum):
    """
    Status label of a single live reading.
    Used by: status classifier, nutrients status API
    """

    UNKNOWN = "unknown"
    OPTIMAL = "optimal"
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"
    TOO_HIGH = "too_high"
    TOO_LOW = "too_low"
    DRY = "dry"
    TOO_WET = "too_wet"
    GOOD = "good"
    MEDIUM = "medium"
    LOW = "low"

    def __str__(self) -> str:
        return self.value


class StatusTone(str, Enum):
    """Severity tone attached to a status for display."""

    NEUTRAL = "neutral"
    SUCCESS = "success"
    WARNING = "warning"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value


class EcLevel(str, Enum):
    """EC alert level relative to the weekly target."""

    UNKNOWN = "unknown"
    LOW = "low"
    OK = "ok"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value


class PhLevel(str, Enum):
    """pH alert level relative to the fixed target range."""

    UNKNOWN = "unknown"
    LOW = "low"
    WARNING_LOW = "warning_low"
    OK = "ok"
    WARNING_HIGH = "warning_high"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value


class RecommendationPriority(str, Enum):
    """Priority of a recommendation, ordered by :attr:`rank`."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def __str__(self) -> str:
        return self.value


_PRIORITY_RANK = {
    RecommendationPriority.CRITICAL: 0,
    RecommendationPriority.WARNING: 1,
    RecommendationPriority.INFO: 2,
}


class RecommendationType(str, Enum):
    EC = "ec"
    PH = "ph"
    TANK = "tank"
    SOIL = "soil"
    PHASE = "phase"
    INVENTORY = "inventory"

    def __str__(self) -> str:
        return self.value


class RecommendationAction(str, Enum):
    """Suggested action token attached to a recommendation."""

    FLUSH = "flush"
    FEED = "feed"
    PH_CORRECT = "ph-correct"
    REFILL = "refill"
    WATER = "water"
    RESTOCK = "restock"

    def __str__(self) -> str:
        return self.value


class PlantStage(str, Enum):
    """
    Lifecycle stage of a registered plant.
    ``EMPTY`` and ``HARVESTED`` plants are inactive.
    """

    EMPTY = "empty"
    SEEDLING = "seedling"
    VEGETATIVE = "vegetative"
    FLOWERING = "flowering"
    FLUSHING = "flushing"
    HARVESTED = "harvested"

    @classmethod
    def inactive(cls) -> frozenset[str]:
        return frozenset({cls.EMPTY.value, cls.HARVESTED.value})

    def __str__(self) -> str:
        return self.value


class DosageStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


class DosageTrigger(str, Enum):
    """What caused a dose to be logged."""

    SCHEDULE = "schedule"
    ADAPTIVE = "adaptive"
    MANUAL = "manual"

    def __str__(self) -> str:
        return self.value
