"""
Services against in-memory stores.

The application services only depend on the structural protocols in
``app.services.protocols``; these fakes stand in for the SQLite repositories.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from app.domain.inventory import InventoryRecord
from app.services.application.inventory_service import InventoryService
from app.services.application.nutrient_service import NutrientService
from app.services.protocols import DosageLogStore, InventoryStore, PlantReader

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class MemoryInventory:
    def __init__(self) -> None:
        self.records: Dict[str, InventoryRecord] = {}

    def get(self, product_id: str) -> Optional[InventoryRecord]:
        return self.records.get(product_id)

    def upsert(self, record: InventoryRecord) -> InventoryRecord:
        self.records[record.product_id] = record
        return record

    def list_all(self) -> Dict[str, InventoryRecord]:
        return dict(self.records)


class MemoryPlants:
    def __init__(self, plants: List[Dict[str, Any]]) -> None:
        self.plants = plants

    def list_plants(self) -> List[Dict[str, Any]]:
        return list(self.plants)


class MemoryLogs:
    def __init__(self) -> None:
        self.rows: List[Dict[str, Any]] = []

    def insert(self, entry: Dict[str, Any]) -> int:
        self.rows.append({**entry, "log_id": len(self.rows) + 1})
        return len(self.rows)

    def get(self, log_id: int) -> Optional[Dict[str, Any]]:
        return next((row for row in self.rows if row["log_id"] == log_id), None)

    def list(self, limit=50, offset=0, start=None, end=None) -> List[Dict[str, Any]]:
        rows = sorted(self.rows, key=lambda r: r["timestamp"], reverse=True)
        return rows[offset : offset + limit]

    def count(self, start=None, end=None) -> int:
        return len(self.rows)

    def stats(self, start: str, end: str) -> Dict[str, Any]:
        ok = [r for r in self.rows if r["status"] == "success" and start <= r["timestamp"] <= end]
        return {
            "total_dosages": len(ok),
            "total_ml": sum(r["total_ml"] for r in ok),
            "total_water_liters": sum(r["water_liters"] for r in ok),
            "concentration_sum": sum(r["concentration_ml_per_liter"] for r in ok),
            "ec_delta_sum": 0,
        }


def test_fakes_satisfy_protocols():
    assert isinstance(MemoryInventory(), InventoryStore)
    assert isinstance(MemoryPlants([]), PlantReader)
    assert isinstance(MemoryLogs(), DosageLogStore)


def test_dose_flow_with_memory_stores():
    store = MemoryInventory()
    plants = MemoryPlants([{"stage": "flowering", "planted_date": (NOW - timedelta(days=64)).isoformat()}])
    logs = MemoryLogs()
    inventory = InventoryService(store)
    service = NutrientService(plants, inventory, logs)

    inventory.update("bio-bloom", {"owned": True})
    entry = service.log_dose(20, now=NOW)

    # 64 days -> week 10, Bio-Bloom at 4 ml/L
    assert entry["week"] == 10
    assert store.get("bio-bloom").current_ml == 920
    assert service.stats(end=NOW)["total_dosages"] == 1
    assert service.list_logs().total == 1
