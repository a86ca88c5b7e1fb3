"""
Plant Service
=============
Application-level service for the plant registry.

The dosing engine reads plants to resolve the current grow week and the
harvest window. This service owns the write side used by the plants API.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from app.domain.exceptions import NotFoundError, ValidationError
from app.domain.nutrient_schedule import calculate_grow_week, is_active_plant
from app.enums.nutrients import PlantStage
from app.utils.time import coerce_datetime, to_iso

if TYPE_CHECKING:
    from infrastructure.database.repositories.plants import PlantRepository

logger = logging.getLogger(__name__)


def _normalize_date(value: Any, field_name: str) -> Optional[str]:
    if value is None or value == "":
        return None
    parsed = coerce_datetime(value)
    if parsed is None:
        raise ValidationError(f"Invalid {field_name}", detail={field_name: value})
    return to_iso(parsed)


class PlantService:
    """Plant CRUD on top of ``PlantRepository``."""

    def __init__(self, plant_repo: "PlantRepository") -> None:
        self.plant_repo = plant_repo

    def list_plants(self) -> List[Dict[str, Any]]:
        return self.plant_repo.list_plants()

    def list_plants_as_dicts(self) -> List[Dict[str, Any]]:
        """Plants with their computed grow week and active flag."""
        result = []
        for plant in self.plant_repo.list_plants():
            item = dict(plant)
            item["active"] = is_active_plant(plant)
            item["grow_week"] = calculate_grow_week(plant.get("planted_date"))
            result.append(item)
        return result

    def get_plant(self, plant_id: int) -> Dict[str, Any]:
        plant = self.plant_repo.get_plant(plant_id)
        if plant is None:
            raise NotFoundError(f"Plant {plant_id} not found", detail={"plant_id": plant_id})
        return plant

    def create_plant(
        self,
        name: str,
        stage: PlantStage | str = PlantStage.SEEDLING,
        planted_date: Any = None,
        harvest_date: Any = None,
    ) -> Dict[str, Any]:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Plant name is required")
        stage = PlantStage(stage)
        plant_id = self.plant_repo.create_plant(
            name=name,
            stage=stage.value,
            planted_date=_normalize_date(planted_date, "planted_date"),
            harvest_date=_normalize_date(harvest_date, "harvest_date"),
        )
        logger.info("Created plant %s (%s) in stage %s", plant_id, name, stage.value)
        return self.get_plant(plant_id)

    def update_stage(self, plant_id: int, stage: PlantStage | str) -> Dict[str, Any]:
        stage = PlantStage(stage)
        self.get_plant(plant_id)
        self.plant_repo.update_stage(plant_id, stage.value)
        logger.info("Plant %s moved to stage %s", plant_id, stage.value)
        return self.get_plant(plant_id)
