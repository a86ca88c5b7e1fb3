from __future__ import annotations

import logging
from dataclasses import dataclass

from app.config import AppConfig
from app.services.application.inventory_service import InventoryService
from app.services.application.nutrient_service import NutrientService
from app.services.application.plant_service import PlantService
from app.services.container_builder import ContainerBuilder
from infrastructure.database.repositories import DosageLogRepository, InventoryRepository, PlantRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler
from infrastructure.logging.audit import AuditLogger

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Aggregate and manage core backend services."""

    config: AppConfig
    database: SQLiteDatabaseHandler
    plant_repo: PlantRepository
    inventory_repo: InventoryRepository
    dosage_log_repo: DosageLogRepository
    audit_logger: AuditLogger
    plant_service: PlantService
    inventory_service: InventoryService
    nutrient_service: NutrientService

    @classmethod
    def build(cls, config: AppConfig) -> "ServiceContainer":
        """Construct the service container with all dependencies."""
        logger.info("Building ServiceContainer using ContainerBuilder...")
        container = cls(**ContainerBuilder(config).build())
        logger.info("ServiceContainer built successfully.")
        return container

    def shutdown(self) -> None:
        """Release external resources before process exit."""
        self.database.close_db()
        logger.info("ServiceContainer shutdown complete.")
