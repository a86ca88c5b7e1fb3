from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class InventoryOperations:
    """Database operations for the ProductInventory table."""

    def get_inventory_record(self, product_id: str) -> Optional[Dict[str, Any]]:
        try:
            db = self.get_db()
            row = db.execute(
                "SELECT product_id, owned, bottle_size, current_ml, updated_at FROM ProductInventory WHERE product_id = ?",
                (product_id,),
            ).fetchone()
            return dict(row) if row else None
        except sqlite3.Error as exc:
            logger.error("get_inventory_record failed for %s: %s", product_id, exc)
            raise

    def list_inventory_records(self) -> List[Dict[str, Any]]:
        try:
            db = self.get_db()
            rows = db.execute(
                "SELECT product_id, owned, bottle_size, current_ml, updated_at FROM ProductInventory ORDER BY product_id"
            ).fetchall()
            return [dict(r) for r in rows]
        except sqlite3.Error as exc:
            logger.error("list_inventory_records failed: %s", exc)
            raise

    def upsert_inventory_record(self, record: Dict[str, Any]) -> None:
        try:
            with self.connection() as db:
                db.execute(
                    """
                    INSERT INTO ProductInventory (product_id, owned, bottle_size, current_ml, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT(product_id) DO UPDATE SET
                        owned = excluded.owned,
                        bottle_size = excluded.bottle_size,
                        current_ml = excluded.current_ml,
                        updated_at = excluded.updated_at
                    """,
                    (
                        record["product_id"],
                        1 if record.get("owned") else 0,
                        record.get("bottle_size"),
                        record.get("current_ml"),
                        record.get("updated_at"),
                    ),
                )
        except sqlite3.Error as exc:
            logger.error("upsert_inventory_record failed for %s: %s", record.get("product_id"), exc)
            raise
