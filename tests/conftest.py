"""
Shared test fixtures for the GrowDose backend test suite.

Provides:
- In-memory SQLite database with all tables created
- Repository instances wired to the test database
- Mock audit logger
- Service factories for the application services
- Helper utilities for seeding test data
- A Flask app + test client backed by a temporary database file

Usage:
    def test_example(nutrient_service, seed):
        seed.create_plant("Northern Lights", planted_days_ago=20)
        assert nutrient_service.grow_context()["current_week"] == 3
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from infrastructure.database.repositories import DosageLogRepository, InventoryRepository, PlantRepository

# ---------------------------------------------------------------------------
# Database & Repositories
# ---------------------------------------------------------------------------
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler

# ---------------------------------------------------------------------------
# Logging, keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("infrastructure").setLevel(logging.WARNING)
logging.getLogger("app").setLevel(logging.WARNING)

# Fixed reference time for date-dependent tests
NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def now() -> datetime:
    return NOW


# ========================== Database Fixtures ==============================


@pytest.fixture()
def db_handler():
    """In-memory SQLite database with all tables created.

    Each test gets a fresh database, no cross-test contamination.
    """
    handler = SQLiteDatabaseHandler(":memory:")
    handler.create_tables()
    yield handler
    handler.close_db()


@pytest.fixture()
def db_connection(db_handler):
    """Raw sqlite3 connection for direct SQL in tests."""
    with db_handler.connection() as conn:
        yield conn


# ========================== Repository Fixtures ============================


@pytest.fixture()
def plant_repo(db_handler):
    """PlantRepository backed by the in-memory DB."""
    return PlantRepository(db_handler)


@pytest.fixture()
def inventory_repo(db_handler):
    """InventoryRepository backed by the in-memory DB."""
    return InventoryRepository(db_handler)


@pytest.fixture()
def dosage_log_repo(db_handler):
    """DosageLogRepository backed by the in-memory DB."""
    return DosageLogRepository(db_handler)


# ========================== Mock Service Fixtures ==========================


@pytest.fixture()
def mock_audit_logger():
    """Mock AuditLogger."""
    logger = MagicMock()
    logger.log_event = MagicMock()
    return logger


# ========================== Service Factory Fixtures =======================


@pytest.fixture()
def inventory_service(inventory_repo, mock_audit_logger):
    """InventoryService with a real repo and mocked audit logger."""
    from app.services.application.inventory_service import InventoryService

    return InventoryService(inventory_repo, audit_logger=mock_audit_logger)


@pytest.fixture()
def plant_service(plant_repo):
    from app.services.application.plant_service import PlantService

    return PlantService(plant_repo)


@pytest.fixture()
def nutrient_service(plant_repo, inventory_service, dosage_log_repo, mock_audit_logger):
    """NutrientService with real repos and default limits."""
    from app.services.application.nutrient_service import NutrientService

    return NutrientService(
        plant_reader=plant_repo,
        inventory_service=inventory_service,
        dosage_log_store=dosage_log_repo,
        audit_logger=mock_audit_logger,
    )


# ========================== Seed Data Helpers ==============================


class SeedData:
    """Helper to create commonly needed test data.

    Usage in tests::

        def test_something(db_handler, seed):
            plant_id = seed.create_plant("Blueberry", planted_days_ago=30)
            seed.set_inventory("bio-grow", owned=True, current_ml=100)
            seed.insert_log(total_ml=30.0, water_liters=10.0)
    """

    def __init__(self, db_handler: SQLiteDatabaseHandler):
        self._db = db_handler

    def create_plant(
        self,
        name: str = "Test Plant",
        stage: str = "vegetative",
        *,
        planted_days_ago: float | None = 10,
        harvest_in_days: float | None = None,
        now: datetime = NOW,
    ) -> int:
        """Create a plant relative to ``now`` and return its ID."""
        planted = (now - timedelta(days=planted_days_ago)).isoformat() if planted_days_ago is not None else None
        harvest = (now + timedelta(days=harvest_in_days)).isoformat() if harvest_in_days is not None else None
        with self._db.connection() as conn:
            cur = conn.execute(
                "INSERT INTO Plants (name, stage, planted_date, harvest_date, created_at) VALUES (?, ?, ?, ?, ?)",
                (name, stage, planted, harvest, now.isoformat()),
            )
            return cur.lastrowid

    def set_inventory(
        self,
        product_id: str,
        *,
        owned: bool = True,
        bottle_size: float = 1000,
        current_ml: float = 1000,
    ) -> None:
        with self._db.connection() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO ProductInventory (product_id, owned, bottle_size, current_ml, updated_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (product_id, 1 if owned else 0, bottle_size, current_ml, NOW.isoformat()),
            )

    def insert_log(
        self,
        *,
        timestamp: datetime = NOW,
        week: int = 6,
        substrate: str = "lightMix",
        water_liters: float = 10.0,
        total_ml: float = 30.0,
        concentration: float | None = 3.0,
        status: str = "success",
        ec_before: float | None = None,
        ec_after: float | None = None,
    ) -> int:
        """Insert a dosage log row and return its ID."""
        with self._db.connection() as conn:
            cur = conn.execute(
                """INSERT INTO DosageLogs (timestamp, week, substrate, water_liters, total_ml,
                   concentration_ml_per_liter, products, status, triggered_by, ec_before, ec_after)
                   VALUES (?, ?, ?, ?, ?, ?, '[]', ?, 'manual', ?, ?)""",
                (
                    timestamp.isoformat(),
                    week,
                    substrate,
                    water_liters,
                    total_ml,
                    concentration,
                    status,
                    ec_before,
                    ec_after,
                ),
            )
            return cur.lastrowid


@pytest.fixture()
def seed(db_handler):
    """SeedData helper for quickly populating the test database."""
    return SeedData(db_handler)


# ========================== Flask App Fixtures =============================


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("GROWDOSE_SECRET_KEY", "test-secret")
    from app import create_app

    database_path = tmp_path / "test.db"
    flask_app = create_app(
        {
            "database_path": str(database_path),
            "audit_log_path": str(tmp_path / "audit.log"),
            "log_to_file": False,
        }
    )
    flask_app.config.update(TESTING=True)
    yield flask_app
    flask_app.config["CONTAINER"].shutdown()


@pytest.fixture()
def client(app):
    return app.test_client()

