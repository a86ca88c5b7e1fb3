"""
Tests for PlantService.
"""

import pytest

from app.domain.exceptions import NotFoundError, ValidationError


class TestPlantService:
    def test_create_and_get(self, plant_service):
        plant = plant_service.create_plant("  Northern Lights ", stage="vegetative", planted_date="2026-02-09")

        assert plant["name"] == "Northern Lights"
        assert plant["stage"] == "vegetative"
        assert plant["planted_date"] == "2026-02-09T00:00:00+00:00"
        assert plant["harvest_date"] is None
        assert plant_service.get_plant(plant["plant_id"]) == plant

    def test_default_stage_is_seedling(self, plant_service):
        assert plant_service.create_plant("Blueberry")["stage"] == "seedling"

    def test_blank_name(self, plant_service):
        with pytest.raises(ValidationError):
            plant_service.create_plant("   ")

    def test_invalid_date(self, plant_service):
        with pytest.raises(ValidationError):
            plant_service.create_plant("Haze", planted_date="yesterday")

    def test_missing_plant(self, plant_service):
        with pytest.raises(NotFoundError):
            plant_service.get_plant(999)

    def test_update_stage(self, plant_service, seed):
        plant_id = seed.create_plant("Skunk", stage="flowering")
        assert plant_service.update_stage(plant_id, "harvested")["stage"] == "harvested"

    def test_update_stage_missing_plant(self, plant_service):
        with pytest.raises(NotFoundError):
            plant_service.update_stage(42, "flowering")

    def test_list_as_dicts_adds_computed_fields(self, plant_service, seed):
        seed.create_plant("Active", stage="flowering", planted_days_ago=20)
        seed.create_plant("Done", stage="harvested", planted_days_ago=120)
        seed.create_plant("Slot", stage="empty", planted_days_ago=None)

        plants = {p["name"]: p for p in plant_service.list_plants_as_dicts()}

        assert plants["Active"]["active"] is True
        assert plants["Active"]["grow_week"] >= 3
        assert plants["Done"]["active"] is False
        assert plants["Slot"]["grow_week"] is None
