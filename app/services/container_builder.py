"""
Container Builder
=================

Extracts service container construction logic from ServiceContainer.build().

Architecture:
- ContainerBuilder: Orchestrates the construction of all services
- build_infrastructure(): database, repositories, audit logging
- build_application_components(): services consumed by the blueprints
- ServiceContainer.build(): Delegates to ContainerBuilder.build()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.config import AppConfig
from app.services.application.inventory_service import InventoryService
from app.services.application.nutrient_service import NutrientService
from app.services.application.plant_service import PlantService
from infrastructure.database.repositories import DosageLogRepository, InventoryRepository, PlantRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler
from infrastructure.logging.audit import AuditLogger

logger = logging.getLogger(__name__)


@dataclass
class InfrastructureComponents:
    """Infrastructure layer components (database, repos, logging)."""

    database: SQLiteDatabaseHandler
    plant_repo: PlantRepository
    inventory_repo: InventoryRepository
    dosage_log_repo: DosageLogRepository
    audit_logger: AuditLogger


@dataclass
class ApplicationComponents:
    """Application services exposed to the API layer."""

    plant_service: PlantService
    inventory_service: InventoryService
    nutrient_service: NutrientService


class ContainerBuilder:
    """Builder for constructing the service container."""

    def __init__(self, config: AppConfig):
        self.config = config

    def build_infrastructure(self) -> InfrastructureComponents:
        """
        Build infrastructure layer (database, repositories, logging).

        Returns:
            InfrastructureComponents with all infrastructure services
        """
        logger.info("Building infrastructure components...")

        audit_logger = AuditLogger(self.config.audit_log_path, self.config.log_level)
        database = SQLiteDatabaseHandler(self.config.database_path)
        database.init_app(None)

        components = InfrastructureComponents(
            database=database,
            plant_repo=PlantRepository(database),
            inventory_repo=InventoryRepository(database),
            dosage_log_repo=DosageLogRepository(database),
            audit_logger=audit_logger,
        )
        logger.info("✓ Infrastructure components initialized")
        return components

    def build_application_components(self, infra: InfrastructureComponents) -> ApplicationComponents:
        logger.info("Building application components...")

        plant_service = PlantService(infra.plant_repo)
        inventory_service = InventoryService(
            infra.inventory_repo,
            audit_logger=infra.audit_logger,
            default_bottle_size=self.config.default_bottle_size_ml,
        )
        nutrient_service = NutrientService(
            plant_reader=infra.plant_repo,
            inventory_service=inventory_service,
            dosage_log_store=infra.dosage_log_repo,
            audit_logger=infra.audit_logger,
            default_substrate=self.config.default_substrate,
            min_tank_liters=self.config.min_tank_liters,
            max_tank_liters=self.config.max_tank_liters,
            stats_default_days=self.config.stats_default_days,
            logs_page_size=self.config.logs_page_size,
        )

        logger.info("✓ Application components initialized")
        return ApplicationComponents(
            plant_service=plant_service,
            inventory_service=inventory_service,
            nutrient_service=nutrient_service,
        )

    def build(self) -> dict[str, Any]:
        """
        Build the complete service container.

        Returns:
            Dictionary with all components for ServiceContainer construction
        """
        infra = self.build_infrastructure()
        app = self.build_application_components(infra)

        return {
            "config": self.config,
            "database": infra.database,
            "plant_repo": infra.plant_repo,
            "inventory_repo": infra.inventory_repo,
            "dosage_log_repo": infra.dosage_log_repo,
            "audit_logger": infra.audit_logger,
            "plant_service": app.plant_service,
            "inventory_service": app.inventory_service,
            "nutrient_service": app.nutrient_service,
        }
