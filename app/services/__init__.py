"""
Service Organization
====================
**application/**
  Singleton services managed by ServiceContainer. One instance per application.
  Examples: NutrientService, InventoryService, PlantService

Pure calculations (schedule, dosage, status, recommendations) live in
``app/domain`` and carry no state; services only wire them to storage.
"""

from .application.inventory_service import InventoryService
from .application.nutrient_service import NutrientService
from .application.plant_service import PlantService

__all__ = [
    "InventoryService",
    "NutrientService",
    "PlantService",
]
