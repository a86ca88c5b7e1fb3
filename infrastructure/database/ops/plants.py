from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class PlantOperations:
    """Database operations for the Plants table."""

    def insert_plant(
        self,
        name: str,
        stage: str,
        planted_date: Optional[str] = None,
        harvest_date: Optional[str] = None,
        created_at: Optional[str] = None,
    ) -> Optional[int]:
        try:
            with self.connection() as db:
                cur = db.execute(
                    """
                    INSERT INTO Plants (name, stage, planted_date, harvest_date, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (name, stage, planted_date, harvest_date, created_at),
                )
                return cur.lastrowid
        except sqlite3.Error as exc:
            logger.error("insert_plant failed: %s", exc)
            raise

    def get_plant(self, plant_id: int) -> Optional[Dict[str, Any]]:
        try:
            row = self.get_db().execute("SELECT * FROM Plants WHERE plant_id = ?", (plant_id,)).fetchone()
            return dict(row) if row else None
        except sqlite3.Error as exc:
            logger.error("get_plant failed for %s: %s", plant_id, exc)
            raise

    def list_plants(self) -> List[Dict[str, Any]]:
        try:
            rows = self.get_db().execute("SELECT * FROM Plants ORDER BY plant_id").fetchall()
            return [dict(r) for r in rows]
        except sqlite3.Error as exc:
            logger.error("list_plants failed: %s", exc)
            raise

    def update_plant_stage(self, plant_id: int, stage: str) -> bool:
        try:
            with self.connection() as db:
                cur = db.execute("UPDATE Plants SET stage = ? WHERE plant_id = ?", (stage, plant_id))
                return cur.rowcount > 0
        except sqlite3.Error as exc:
            logger.error("update_plant_stage failed for %s: %s", plant_id, exc)
            raise
