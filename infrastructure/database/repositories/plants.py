"""
Plant Repository
================

Repository for plant records. The dosing engine only needs the read side
(stage, planted date, harvest date) to resolve the current grow week and
the harvest window; creation and stage updates back the plants API.
"""
from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional

from app.domain.exceptions import RepositoryError
from app.utils.time import iso_now
from infrastructure.database.ops.plants import PlantOperations


class PlantRepository:
    """Repository for plant operations."""

    def __init__(self, backend: PlantOperations) -> None:
        self._backend = backend

    def create_plant(
        self,
        *,
        name: str,
        stage: str,
        planted_date: Optional[str] = None,
        harvest_date: Optional[str] = None,
    ) -> int:
        try:
            plant_id = self._backend.insert_plant(
                name=name,
                stage=stage,
                planted_date=planted_date,
                harvest_date=harvest_date,
                created_at=iso_now(timespec="seconds"),
            )
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to create plant") from exc
        if plant_id is None:
            raise RepositoryError("Plant insert returned no id")
        return plant_id

    def get_plant(self, plant_id: int) -> Optional[Dict[str, Any]]:
        try:
            return self._backend.get_plant(plant_id)
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to read plant", detail={"plant_id": plant_id}) from exc

    def list_plants(self) -> List[Dict[str, Any]]:
        try:
            return self._backend.list_plants()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to list plants") from exc

    def update_stage(self, plant_id: int, stage: str) -> bool:
        try:
            return self._backend.update_plant_stage(plant_id, stage)
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to update plant", detail={"plant_id": plant_id}) from exc
