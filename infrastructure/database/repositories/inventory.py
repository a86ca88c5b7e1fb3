from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from app.domain.exceptions import RepositoryError
from app.domain.inventory import InventoryRecord
from app.utils.time import iso_now
from infrastructure.database.ops.inventory import InventoryOperations


@dataclass(frozen=True)
class InventoryRepository:
    _backend: InventoryOperations

    def get(self, product_id: str) -> InventoryRecord | None:
        try:
            row = self._backend.get_inventory_record(product_id)
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to read inventory", detail={"product_id": product_id}) from exc
        return InventoryRecord.from_row(row) if row else None

    def upsert(self, record: InventoryRecord) -> InventoryRecord:
        try:
            self._backend.upsert_inventory_record(
                {
                    "product_id": record.product_id,
                    "owned": record.owned,
                    "bottle_size": record.bottle_size,
                    "current_ml": record.current_ml,
                    "updated_at": iso_now(timespec="seconds"),
                }
            )
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to save inventory", detail={"product_id": record.product_id}) from exc
        return record

    def list_all(self) -> dict[str, InventoryRecord]:
        try:
            rows = self._backend.list_inventory_records()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to list inventory") from exc
        return {row["product_id"]: InventoryRecord.from_row(row) for row in rows}
