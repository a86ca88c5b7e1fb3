from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

_COLUMNS = (
    "timestamp",
    "week",
    "substrate",
    "water_liters",
    "total_ml",
    "concentration_ml_per_liter",
    "products",
    "status",
    "triggered_by",
    "ec_before",
    "ph_before",
    "ec_after",
    "ph_after",
    "notes",
)


def _period_clause(start: Optional[str], end: Optional[str]) -> Tuple[str, List[Any]]:
    clause = ""
    params: List[Any] = []
    if start:
        clause += " AND timestamp >= ?"
        params.append(start)
    if end:
        clause += " AND timestamp <= ?"
        params.append(end)
    return clause, params


def _decode(row: sqlite3.Row) -> Dict[str, Any]:
    data = dict(row)
    if data.get("products"):
        try:
            data["products"] = json.loads(data["products"])
        except (TypeError, ValueError):
            logger.warning("Dosage log %s has unreadable products payload", data.get("log_id"))
            data["products"] = []
    else:
        data["products"] = []
    return data


class DosageLogOperations:
    """Database operations for the DosageLogs table."""

    def insert_dosage_log(self, entry: Dict[str, Any]) -> Optional[int]:
        values = [entry.get(col) for col in _COLUMNS]
        values[_COLUMNS.index("products")] = json.dumps(entry.get("products") or [])
        placeholders = ", ".join("?" for _ in _COLUMNS)
        try:
            with self.connection() as db:
                cur = db.execute(
                    f"INSERT INTO DosageLogs ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                    values,
                )
                return cur.lastrowid
        except sqlite3.Error as exc:
            logger.error("insert_dosage_log failed: %s", exc)
            raise

    def get_dosage_log(self, log_id: int) -> Optional[Dict[str, Any]]:
        try:
            row = self.get_db().execute("SELECT * FROM DosageLogs WHERE log_id = ?", (log_id,)).fetchone()
            return _decode(row) if row else None
        except sqlite3.Error as exc:
            logger.error("get_dosage_log failed for %s: %s", log_id, exc)
            raise

    def list_dosage_logs(
        self,
        limit: int = 50,
        offset: int = 0,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        clause, params = _period_clause(start, end)
        query = f"SELECT * FROM DosageLogs WHERE 1=1{clause} ORDER BY timestamp DESC, log_id DESC LIMIT ? OFFSET ?"
        try:
            rows = self.get_db().execute(query, [*params, limit, offset]).fetchall()
            return [_decode(r) for r in rows]
        except sqlite3.Error as exc:
            logger.error("list_dosage_logs failed: %s", exc)
            raise

    def count_dosage_logs(self, start: Optional[str] = None, end: Optional[str] = None) -> int:
        clause, params = _period_clause(start, end)
        try:
            row = self.get_db().execute(f"SELECT COUNT(*) FROM DosageLogs WHERE 1=1{clause}", params).fetchone()
            return int(row[0]) if row else 0
        except sqlite3.Error as exc:
            logger.error("count_dosage_logs failed: %s", exc)
            raise

    def get_dosage_stats(self, start: str, end: str, status: str = "success") -> Dict[str, Any]:
        """Aggregates over logs with ``status`` in ``[start, end]``."""
        clause, params = _period_clause(start, end)
        try:
            row = self.get_db().execute(
                f"""
                SELECT
                    COUNT(*) AS total_dosages,
                    COALESCE(SUM(total_ml), 0) AS total_ml,
                    COALESCE(SUM(water_liters), 0) AS total_water_liters,
                    COALESCE(SUM(COALESCE(concentration_ml_per_liter, 0)), 0) AS concentration_sum,
                    COALESCE(SUM(
                        CASE WHEN ec_before IS NOT NULL AND ec_after IS NOT NULL
                             THEN ec_after - ec_before ELSE 0 END
                    ), 0) AS ec_delta_sum
                FROM DosageLogs
                WHERE status = ?{clause}
                """,
                [status, *params],
            ).fetchone()
            return dict(row)
        except sqlite3.Error as exc:
            logger.error("get_dosage_stats failed: %s", exc)
            raise
