"""
Nutrient Service
================
Application service for the BioBizz dosing engine.

Ties the pure domain functions (schedule, dosage calculator, status
classifier, recommendation engine) to the stored plants, inventory and
dosing history.

Responsibilities:
- Resolve the grow context (current week, phase and schedule row)
- Validate tank volumes and build dosage plans
- Classify live readings and produce ordered recommendations
- Record doses, deduct stock, list history and aggregate statistics
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from app.constants import STATS_DEFAULT_DAYS, DosingLimits, Pagination, SubstrateConfig
from app.domain.dosage_calculator import DosagePlan, calculate_dosage
from app.domain.exceptions import NotFoundError, ValidationError
from app.domain.nutrient_schedule import (
    active_plants,
    current_grow_week,
    get_phase_for_week,
    get_schedule_for_week,
)
from app.domain.recommendations import Recommendation, generate_recommendations
from app.domain.sensor_status import (
    SensorSnapshot,
    StatusResult,
    classify_all,
    ec_alert_level,
    ph_alert_level,
)
from app.enums.nutrients import DosageStatus, DosageTrigger
from app.utils.time import coerce_datetime, days_ago, to_iso, utc_now
from infrastructure.database.pagination import PaginatedResponse, PaginationParams

if TYPE_CHECKING:
    from app.services.application.inventory_service import InventoryService
    from app.services.protocols import DosageLogStore, PlantReader
    from infrastructure.logging.audit import AuditLogger

logger = logging.getLogger(__name__)


class NutrientService:
    """Dosing engine facade used by the nutrients API."""

    def __init__(
        self,
        plant_reader: "PlantReader",
        inventory_service: "InventoryService",
        dosage_log_store: "DosageLogStore",
        audit_logger: Optional["AuditLogger"] = None,
        *,
        default_substrate: str = SubstrateConfig.DEFAULT_KEY,
        min_tank_liters: float = DosingLimits.MIN_TANK_LITERS,
        max_tank_liters: float = DosingLimits.MAX_TANK_LITERS,
        stats_default_days: int = STATS_DEFAULT_DAYS,
        logs_page_size: int = Pagination.DEFAULT_PAGE_SIZE,
    ) -> None:
        self.plant_reader = plant_reader
        self.inventory_service = inventory_service
        self.dosage_log_store = dosage_log_store
        self.audit_logger = audit_logger
        self.default_substrate = default_substrate
        self.min_tank_liters = min_tank_liters
        self.max_tank_liters = max_tank_liters
        self.stats_default_days = stats_default_days
        self.logs_page_size = logs_page_size

    # ── Grow context ─────────────────────────────────────────────────

    def resolve_week(self, week: Optional[int] = None, now: Optional[datetime] = None) -> int:
        """Explicit week if given, otherwise the week of the oldest active plant."""
        if week is not None:
            return week
        return current_grow_week(self.plant_reader.list_plants(), now=now)

    def grow_context(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        plants = self.plant_reader.list_plants()
        week = current_grow_week(plants, now=now)
        schedule = get_schedule_for_week(week)
        return {
            "current_week": week,
            "phase": get_phase_for_week(week).to_dict(),
            "schedule": schedule.to_dict(),
            "active_plants": len(active_plants(plants)),
            "required_products": schedule.required_product_ids(),
        }

    # ── Dosage ───────────────────────────────────────────────────────

    def _validate_liters(self, water_liters: float) -> None:
        if not self.min_tank_liters <= water_liters <= self.max_tank_liters:
            raise ValidationError(
                f"water_liters must be between {self.min_tank_liters:g} and {self.max_tank_liters:g}",
                detail={"water_liters": water_liters},
            )

    def calculate(
        self,
        water_liters: float,
        week: Optional[int] = None,
        substrate: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> DosagePlan:
        """
        Dosage plan for a tank.

        Raises:
            ValidationError: Volume outside the accepted tank range
        """
        self._validate_liters(water_liters)
        return calculate_dosage(
            water_liters,
            self.resolve_week(week, now=now),
            substrate or self.default_substrate,
        )

    # ── Status & recommendations ─────────────────────────────────────

    def status(self, snapshot: SensorSnapshot, week: Optional[int] = None) -> Dict[str, StatusResult]:
        schedule = get_schedule_for_week(self.resolve_week(week))
        return classify_all(snapshot, schedule)

    def recommendations(
        self,
        snapshot: SensorSnapshot,
        plants: Optional[List[Dict[str, Any]]] = None,
        week: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[Recommendation]:
        """Ordered recommendations for the current readings, plants and stock."""
        if plants is None:
            plants = self.plant_reader.list_plants()
        if week is None:
            week = current_grow_week(plants, now=now)
        schedule = get_schedule_for_week(week)

        recs = generate_recommendations(
            ec_status=ec_alert_level(snapshot.ec, schedule),
            ph_status=ph_alert_level(snapshot.ph),
            current_ec=snapshot.ec,
            current_ph=snapshot.ph,
            tank_level=snapshot.tank_level,
            avg_soil_moisture=snapshot.soil_moisture,
            active_plants=active_plants(plants),
            current_week=week,
            current_schedule=schedule,
            inventory=self.inventory_service.list_records(),
            now=now,
        )
        logger.debug("Generated %d recommendations for week %s", len(recs), week)
        return recs

    # ── Dosing log ───────────────────────────────────────────────────

    def log_dose(
        self,
        water_liters: float,
        week: Optional[int] = None,
        substrate: Optional[str] = None,
        *,
        status: DosageStatus = DosageStatus.SUCCESS,
        triggered_by: DosageTrigger = DosageTrigger.MANUAL,
        ec_before: Optional[float] = None,
        ph_before: Optional[float] = None,
        ec_after: Optional[float] = None,
        ph_after: Optional[float] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Compute the plan for a dose, store it and deduct the used stock.

        Only successful doses consume inventory.

        Returns:
            The stored log entry
        """
        plan = self.calculate(water_liters, week=week, substrate=substrate, now=now)
        status = DosageStatus(status)
        triggered_by = DosageTrigger(triggered_by)

        entry = {
            "timestamp": to_iso(now or utc_now()),
            "week": plan.schedule_week,
            "substrate": plan.substrate,
            "water_liters": plan.water_liters,
            "total_ml": plan.total_ml,
            "concentration_ml_per_liter": plan.concentration_ml_per_liter,
            "products": [
                {"product_id": dose.product.id, "ml_per_liter": dose.ml_per_liter, "total_ml": dose.total_ml}
                for dose in plan.products
            ],
            "status": status.value,
            "triggered_by": triggered_by.value,
            "ec_before": ec_before,
            "ph_before": ph_before,
            "ec_after": ec_after,
            "ph_after": ph_after,
            "notes": notes,
        }
        log_id = self.dosage_log_store.insert(entry)

        if status == DosageStatus.SUCCESS:
            self.inventory_service.consume_plan(plan)

        logger.info(
            "Logged dose #%s: %.1f ml in %.1f L (week %s, %s)",
            log_id,
            plan.total_ml,
            plan.water_liters,
            plan.schedule_week,
            plan.substrate,
        )
        if self.audit_logger is not None:
            self.audit_logger.log_event(
                triggered_by.value,
                "dosage.log",
                f"dosage_log:{log_id}",
                status.value,
                total_ml=plan.total_ml,
                water_liters=plan.water_liters,
            )
        return self.get_log(log_id)

    def get_log(self, log_id: int) -> Dict[str, Any]:
        entry = self.dosage_log_store.get(log_id)
        if entry is None:
            raise NotFoundError(f"Dosage log {log_id} not found", detail={"log_id": log_id})
        return entry

    def list_logs(
        self,
        limit: Optional[int] = None,
        page: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> PaginatedResponse:
        """Newest-first page of the dosing history."""
        try:
            params = PaginationParams.from_request(limit, page, default_limit=self.logs_page_size)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        start_iso = to_iso(start) if start else None
        end_iso = to_iso(end) if end else None
        items = self.dosage_log_store.list(limit=params.limit, offset=params.offset, start=start_iso, end=end_iso)
        total = self.dosage_log_store.count(start=start_iso, end=end_iso)
        return PaginatedResponse(items=items, total=total, limit=params.limit, page=params.page)

    def stats(self, start: Optional[datetime] = None, end: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Aggregates over successful doses in ``[start, end]``.

        Defaults to the last ``stats_default_days`` days.
        """
        end = coerce_datetime(end) or utc_now()
        start = coerce_datetime(start) or days_ago(self.stats_default_days, now=end)
        if start > end:
            raise ValidationError("start must not be after end")

        raw = self.dosage_log_store.stats(to_iso(start), to_iso(end))
        count = int(raw.get("total_dosages") or 0)
        total_ml = float(raw.get("total_ml") or 0)
        return {
            "total_dosages": count,
            "total_volume_ml": round(total_ml, 1),
            "total_volume_liters": round(total_ml / 1000, 3),
            "total_water_liters": round(float(raw.get("total_water_liters") or 0), 1),
            "avg_concentration_ml_per_liter": (
                round(float(raw.get("concentration_sum") or 0) / count, 2) if count else 0.0
            ),
            "avg_ec_increase": round(float(raw.get("ec_delta_sum") or 0) / count, 3) if count else 0.0,
            "period": {"start": to_iso(start), "end": to_iso(end)},
        }
