"""Repository facades exposing typed accessors over low-level mixins.

Services depend on the protocols in ``app/services/protocols.py``; these
SQLite-backed repositories satisfy them structurally::

    from infrastructure.database.repositories import InventoryRepository
"""

from infrastructure.database.repositories.dosage_logs import DosageLogRepository
from infrastructure.database.repositories.inventory import InventoryRepository
from infrastructure.database.repositories.plants import PlantRepository

__all__ = [
    "DosageLogRepository",
    "InventoryRepository",
    "PlantRepository",
]
