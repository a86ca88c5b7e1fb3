"""
Service protocols (structural typing interfaces).

Protocols let consumer services declare the *minimal* surface they depend on
without importing the concrete class, breaking circular imports and making
tests trivially mockable.

Usage
-----
In a consumer service::

    from __future__ import annotations
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from app.services.protocols import InventoryStore

    class InventoryService:
        def __init__(self, store: "InventoryStore", ...): ...

At runtime the SQLite repositories already satisfy these protocols via
structural subtyping, and so does any in-memory fake used in tests.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from app.domain.inventory import InventoryRecord


@runtime_checkable
class InventoryStore(Protocol):
    """Key-value store of inventory records keyed by product id."""

    def get(self, product_id: str) -> Optional[InventoryRecord]:
        """Return the stored record, or ``None`` if never saved."""
        ...

    def upsert(self, record: InventoryRecord) -> InventoryRecord:
        """Insert or replace the record for ``record.product_id``."""
        ...

    def list_all(self) -> Dict[str, InventoryRecord]:
        ...


@runtime_checkable
class PlantReader(Protocol):
    """Read-only view over registered plants.

    Each plant dict carries at least ``stage``, ``planted_date`` and
    ``harvest_date``.
    """

    def list_plants(self) -> List[Dict[str, Any]]:
        ...


@runtime_checkable
class DosageLogStore(Protocol):
    """Append-only dosing history."""

    def insert(self, entry: Dict[str, Any]) -> int:
        ...

    def get(self, log_id: int) -> Optional[Dict[str, Any]]:
        ...

    def list(
        self, limit: int = 50, offset: int = 0, start: Optional[str] = None, end: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        ...

    def count(self, start: Optional[str] = None, end: Optional[str] = None) -> int:
        ...

    def stats(self, start: str, end: str) -> Dict[str, Any]:
        ...
