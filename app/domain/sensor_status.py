"""
Sensor Status Classifier
========================

Pure classifiers for the live nutrient readings. Each dimension maps a
reading to a :class:`StatusResult` (status label, tone, display colour).

A reading of ``None`` or ``0`` means "no reading yet" and is classified as
``unknown``. This applies to the tank as well: a tank at exactly 0 % is
reported as ``unknown``, not ``low``.

Two families live here:

- panel classifiers (``classify_*``): the per-dimension status panel
- alert levels (``ec_alert_level`` / ``ph_alert_level``): the inputs of the
  recommendation engine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from app.constants import (
    TANK_ADC_DIVISOR,
    AlertThresholds,
    FeedingRules,
    StatusThresholds,
)
from app.domain.nutrient_schedule import EcTarget, WeeklyScheduleEntry
from app.enums.nutrients import EcLevel, PhLevel, SensorStatus, StatusTone

COLOR_OPTIMAL = "#22c55e"
COLOR_OK = "#3b82f6"
COLOR_WARNING = "#f59e0b"
COLOR_CRITICAL = "#ef4444"
COLOR_UNKNOWN = "#6b7280"


@dataclass(frozen=True)
class StatusResult:
    status: SensorStatus
    label: str
    tone: StatusTone
    color: str

    def to_dict(self) -> dict[str, str]:
        return {
            "status": str(self.status),
            "label": self.label,
            "tone": str(self.tone),
            "color": self.color,
        }


UNKNOWN = StatusResult(SensorStatus.UNKNOWN, "No data", StatusTone.NEUTRAL, COLOR_UNKNOWN)


def _has_reading(value: float | None) -> bool:
    return bool(value)


def _round_or_zero(value: float) -> int:
    # half-up, readings are non-negative
    return int(value + 0.5)


# ── Panel classifiers ────────────────────────────────────────────────


def classify_ec(ec: float | None, target: EcTarget | None = None) -> StatusResult:
    """EC status; the weekly target takes precedence over the fixed bounds."""
    if not _has_reading(ec):
        return UNKNOWN
    if target is not None and target.contains(ec):
        return StatusResult(SensorStatus.OPTIMAL, "Optimal", StatusTone.SUCCESS, COLOR_OPTIMAL)
    if ec > StatusThresholds.EC_TOO_HIGH:
        return StatusResult(SensorStatus.TOO_HIGH, "Too high", StatusTone.CRITICAL, COLOR_CRITICAL)
    if ec < StatusThresholds.EC_TOO_LOW:
        return StatusResult(SensorStatus.TOO_LOW, "Too low", StatusTone.WARNING, COLOR_WARNING)
    return StatusResult(SensorStatus.OK, "OK", StatusTone.SUCCESS, COLOR_OK)


def classify_ph(ph: float | None) -> StatusResult:
    if not _has_reading(ph):
        return UNKNOWN
    if FeedingRules.PH_TARGET_MIN <= ph <= FeedingRules.PH_TARGET_MAX:
        return StatusResult(SensorStatus.OPTIMAL, "Optimal", StatusTone.SUCCESS, COLOR_OPTIMAL)
    if ph < StatusThresholds.PH_CRITICAL_LOW or ph > StatusThresholds.PH_CRITICAL_HIGH:
        return StatusResult(SensorStatus.CRITICAL, "Critical", StatusTone.CRITICAL, COLOR_CRITICAL)
    return StatusResult(SensorStatus.WARNING, "Check", StatusTone.WARNING, COLOR_WARNING)


def classify_temperature(temp: float | None) -> StatusResult:
    if not _has_reading(temp):
        return UNKNOWN
    if StatusThresholds.TEMP_OPTIMAL_MIN <= temp <= StatusThresholds.TEMP_OPTIMAL_MAX:
        return StatusResult(SensorStatus.OPTIMAL, "Optimal", StatusTone.SUCCESS, COLOR_OPTIMAL)
    if temp < StatusThresholds.TEMP_CRITICAL_LOW or temp > StatusThresholds.TEMP_CRITICAL_HIGH:
        return StatusResult(SensorStatus.CRITICAL, "Critical", StatusTone.CRITICAL, COLOR_CRITICAL)
    return StatusResult(SensorStatus.OK, "OK", StatusTone.WARNING, COLOR_WARNING)


def classify_soil_moisture(moisture: float | None) -> StatusResult:
    if not _has_reading(moisture):
        return UNKNOWN
    if StatusThresholds.SOIL_OPTIMAL_MIN <= moisture <= StatusThresholds.SOIL_OPTIMAL_MAX:
        return StatusResult(SensorStatus.OPTIMAL, "Optimal", StatusTone.SUCCESS, COLOR_OPTIMAL)
    if moisture < StatusThresholds.SOIL_DRY:
        return StatusResult(SensorStatus.DRY, "Dry", StatusTone.CRITICAL, COLOR_CRITICAL)
    if moisture > StatusThresholds.SOIL_TOO_WET:
        return StatusResult(SensorStatus.TOO_WET, "Too wet", StatusTone.WARNING, COLOR_WARNING)
    return StatusResult(SensorStatus.OK, "OK", StatusTone.SUCCESS, COLOR_OK)


def classify_tank_level(level: float | None) -> StatusResult:
    if not _has_reading(level):
        return UNKNOWN
    if level >= StatusThresholds.TANK_GOOD:
        return StatusResult(SensorStatus.GOOD, "Good", StatusTone.SUCCESS, COLOR_OPTIMAL)
    if level >= StatusThresholds.TANK_MEDIUM:
        return StatusResult(SensorStatus.MEDIUM, "Medium", StatusTone.WARNING, COLOR_WARNING)
    return StatusResult(SensorStatus.LOW, "Low", StatusTone.CRITICAL, COLOR_CRITICAL)


# ── Alert levels (recommendation inputs) ─────────────────────────────


def ec_alert_level(ec: float | None, schedule: WeeklyScheduleEntry | None = None) -> EcLevel:
    """
    EC level used by the recommendation engine.

    Relative to the weekly target first (below 70 % of its minimum or above
    130 % of its maximum), then against the absolute bounds 0.4 / 2.8.
    """
    if not _has_reading(ec):
        return EcLevel.UNKNOWN
    if schedule is not None:
        target = schedule.ec_target
        if ec < target.min * AlertThresholds.EC_TARGET_LOW_FACTOR:
            return EcLevel.LOW
        if ec > target.max * AlertThresholds.EC_TARGET_HIGH_FACTOR:
            return EcLevel.HIGH
    if ec < AlertThresholds.EC_ABSOLUTE_LOW:
        return EcLevel.LOW
    if ec > AlertThresholds.EC_ABSOLUTE_HIGH:
        return EcLevel.HIGH
    return EcLevel.OK


def ph_alert_level(ph: float | None) -> PhLevel:
    if not _has_reading(ph):
        return PhLevel.UNKNOWN
    margin = AlertThresholds.PH_WARNING_MARGIN
    if ph < FeedingRules.PH_TARGET_MIN - margin:
        return PhLevel.LOW
    if ph > FeedingRules.PH_TARGET_MAX + margin:
        return PhLevel.HIGH
    if ph < FeedingRules.PH_TARGET_MIN:
        return PhLevel.WARNING_LOW
    if ph > FeedingRules.PH_TARGET_MAX:
        return PhLevel.WARNING_HIGH
    return PhLevel.OK


# ── Snapshot ─────────────────────────────────────────────────────────


def average_soil_moisture(slots: Sequence[float | None] | None) -> int:
    """Rounded mean of the positive soil slot readings, 0 when none."""
    valid = [float(v) for v in (slots or []) if v is not None and v > 0]
    if not valid:
        return 0
    return _round_or_zero(sum(valid) / len(valid))


@dataclass(frozen=True)
class SensorSnapshot:
    """Latest live readings. Zero means "no reading"."""

    ec: float = 0.0
    ph: float = 0.0
    temp: float = 0.0
    tank_level: float = 0.0
    soil_moisture: float = 0.0
    soil_slots: tuple[float, ...] = field(default_factory=tuple)
    pump_running: bool = False
    pump_progress: float = 0.0

    @classmethod
    def from_telemetry(
        cls,
        telemetry: Mapping[str, Any] | None,
        reservoir: Mapping[str, Any] | None = None,
    ) -> "SensorSnapshot":
        """
        Normalise a telemetry payload.

        EC, pH and temperature fall back to the reservoir state. The tank
        level is ``reservoirLevel_percent`` or the raw ``tankLevel`` ADC value
        scaled to percent.
        """
        telemetry = telemetry or {}
        main = (reservoir or {}).get("main") or {}

        def _pick(key: str) -> float:
            return float(telemetry.get(key) or main.get(key) or 0)

        tank = telemetry.get("reservoirLevel_percent") or 0
        if not tank and telemetry.get("tankLevel"):
            tank = _round_or_zero(float(telemetry["tankLevel"]) / TANK_ADC_DIVISOR)

        slots = tuple(float(v or 0) for v in telemetry.get("soil") or ())
        return cls(
            ec=_pick("ec"),
            ph=_pick("ph"),
            temp=_pick("temp"),
            tank_level=float(tank),
            soil_moisture=float(average_soil_moisture(slots)),
            soil_slots=slots,
            pump_running=bool(telemetry.get("pumpRunning", False)),
            pump_progress=float(telemetry.get("progress_percent") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "ec": self.ec,
            "ph": self.ph,
            "temp": self.temp,
            "tank_level": self.tank_level,
            "soil_moisture": self.soil_moisture,
            "soil_slots": list(self.soil_slots),
            "pump_running": self.pump_running,
            "pump_progress": self.pump_progress,
        }


def classify_all(snapshot: SensorSnapshot, schedule: WeeklyScheduleEntry | None = None) -> dict[str, StatusResult]:
    """Classify every dimension of a snapshot."""
    target = schedule.ec_target if schedule is not None else None
    return {
        "ec": classify_ec(snapshot.ec, target),
        "ph": classify_ph(snapshot.ph),
        "temp": classify_temperature(snapshot.temp),
        "soil_moisture": classify_soil_moisture(snapshot.soil_moisture),
        "tank_level": classify_tank_level(snapshot.tank_level),
    }
