"""
Enums Module
============

This module provides enumeration types for the GrowDose application.
Enums ensure type safety and consistency across the codebase.
"""

from app.enums.nutrients import (
    DosageStatus,
    DosageTrigger,
    EcLevel,
    PhLevel,
    PlantStage,
    ProductCategory,
    RecommendationAction,
    RecommendationPriority,
    RecommendationType,
    SensorStatus,
    StatusTone,
)

__all__ = [
    "DosageStatus",
    "DosageTrigger",
    "EcLevel",
    "PhLevel",
    "PlantStage",
    "ProductCategory",
    "RecommendationAction",
    "RecommendationPriority",
    "RecommendationType",
    "SensorStatus",
    "StatusTone",
]
