from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Any

from app.domain.exceptions import RepositoryError
from infrastructure.database.ops.dosage_logs import DosageLogOperations


@dataclass(frozen=True)
class DosageLogRepository:
    _backend: DosageLogOperations

    def insert(self, entry: dict[str, Any]) -> int:
        try:
            log_id = self._backend.insert_dosage_log(entry)
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to store dosage log") from exc
        if log_id is None:
            raise RepositoryError("Dosage log insert returned no id")
        return log_id

    def get(self, log_id: int) -> dict[str, Any] | None:
        try:
            return self._backend.get_dosage_log(log_id)
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to read dosage log", detail={"log_id": log_id}) from exc

    def list(
        self, limit: int = 50, offset: int = 0, start: str | None = None, end: str | None = None
    ) -> list[dict[str, Any]]:
        try:
            return self._backend.list_dosage_logs(limit=limit, offset=offset, start=start, end=end)
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to list dosage logs") from exc

    def count(self, start: str | None = None, end: str | None = None) -> int:
        try:
            return self._backend.count_dosage_logs(start=start, end=end)
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to count dosage logs") from exc

    def stats(self, start: str, end: str) -> dict[str, Any]:
        try:
            return self._backend.get_dosage_stats(start, end)
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to aggregate dosage logs") from exc
