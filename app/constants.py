"""
Application Constants
=====================

Centralized constants to replace magic numbers throughout the codebase.
Organized by domain for easy discovery and maintenance.

The sensor thresholds below describe the safe operating envelope of the
grow and are intentionally NOT configurable through ``AppConfig``.

Usage:
    from app.constants import MAX_GROW_WEEKS, REFERENCE_TANK_LITERS
    from app.constants import StatusThresholds, SubstrateConfig
"""

from dataclasses import dataclass

# =============================================================================
# Schedule Constants
# =============================================================================

MIN_GROW_WEEK = 1
MAX_GROW_WEEKS = 16
FLUSH_WEEKS = 2
FLUSH_START_WEEK = MAX_GROW_WEEKS - FLUSH_WEEKS + 1  # 15

# Standard tank size used to estimate product consumption per week
REFERENCE_TANK_LITERS = 10.0


class FeedingRules:
    """Fixed BioBizz feeding rules."""

    PH_TARGET_MIN = 6.2
    PH_TARGET_MAX = 6.5


# =============================================================================
# Status Classifier Thresholds
# =============================================================================


class StatusThresholds:
    """Fixed thresholds for the live status panel."""

    # EC (mS/cm)
    EC_TOO_HIGH = 2.5
    EC_TOO_LOW = 0.4

    # pH
    PH_CRITICAL_LOW = 5.5
    PH_CRITICAL_HIGH = 7.0

    # Water temperature (°C)
    TEMP_OPTIMAL_MIN = 18.0
    TEMP_OPTIMAL_MAX = 24.0
    TEMP_CRITICAL_LOW = 15.0
    TEMP_CRITICAL_HIGH = 28.0

    # Soil moisture (%)
    SOIL_OPTIMAL_MIN = 40.0
    SOIL_OPTIMAL_MAX = 70.0
    SOIL_DRY = 25.0
    SOIL_TOO_WET = 80.0

    # Tank level (%)
    TANK_GOOD = 50.0
    TANK_MEDIUM = 20.0


class AlertThresholds:
    """Thresholds used to derive alert levels for recommendations."""

    # EC relative to the weekly target range
    EC_TARGET_LOW_FACTOR = 0.7
    EC_TARGET_HIGH_FACTOR = 1.3
    # EC absolute bounds
    EC_ABSOLUTE_LOW = 0.4
    EC_ABSOLUTE_HIGH = 2.8

    # Distance outside the pH target before a reading becomes critical
    PH_WARNING_MARGIN = 0.3

    HARVEST_WINDOW_DAYS = 14
    TANK_LOW_PERCENT = 20.0
    SOIL_DRY_PERCENT = 30.0
    INVENTORY_LOW_RATIO = 0.2


# =============================================================================
# Inventory Constants
# =============================================================================

DEFAULT_BOTTLE_SIZE_ML = 1000
BOTTLE_SIZES_ML = (250, 500, 1000, 5000)

# Raw ESP32 ADC reading (0..4095) to tank percent
TANK_ADC_DIVISOR = 40.95


# =============================================================================
# Dosing Log Constants
# =============================================================================


class DosingLimits:
    """Accepted tank volume range in litres."""

    MIN_TANK_LITERS = 1.0
    MAX_TANK_LITERS = 100.0


class Pagination:
    """Pagination defaults for list endpoints."""

    DEFAULT_PAGE_SIZE = 50
    MAX_PAGE_SIZE = 500


STATS_DEFAULT_DAYS = 30


# =============================================================================
# Substrate Configuration
# =============================================================================


@dataclass(frozen=True)
class SubstrateModifier:
    """Dose multiplier for a BioBizz substrate."""

    key: str
    label: str
    modifier: float
    description: str

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "modifier": self.modifier,
            "description": self.description,
        }


class SubstrateConfig:
    """Substrate modifiers applied to the Light Mix base schedule."""

    LIGHT_MIX = SubstrateModifier(
        key="lightMix",
        label="Light Mix",
        modifier=1.0,
        description="Standard BioBizz dosage",
    )

    ALL_MIX = SubstrateModifier(
        key="allMix",
        label="All Mix",
        modifier=0.75,  # pre-fertilised soil
        description="25% less (pre-fertilised soil)",
    )

    COCO_MIX = SubstrateModifier(
        key="cocoMix",
        label="Coco Mix",
        modifier=1.1,
        description="10% more (coco needs more CalMag)",
    )

    DEFAULT_KEY = "lightMix"
    NEUTRAL_MODIFIER = 1.0

    _REGISTRY: dict[str, SubstrateModifier] = {
        "lightMix": LIGHT_MIX,
        "allMix": ALL_MIX,
        "cocoMix": COCO_MIX,
    }

    @classmethod
    def get(cls, key: str | None) -> SubstrateModifier | None:
        """Get substrate by key, ``None`` for unknown keys."""
        if not key:
            return None
        return cls._REGISTRY.get(key)

    @classmethod
    def modifier_for(cls, key: str | None) -> float:
        """Multiplier for a substrate key; unknown keys are a no-op (1.0)."""
        substrate = cls.get(key)
        if substrate is None:
            return cls.NEUTRAL_MODIFIER
        return substrate.modifier

    @classmethod
    def list_all(cls) -> list[SubstrateModifier]:
        """List all substrates in declaration order."""
        return list(cls._REGISTRY.values())
