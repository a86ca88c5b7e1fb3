import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from flask import Flask

from infrastructure.database.ops.dosage_logs import DosageLogOperations
from infrastructure.database.ops.inventory import InventoryOperations
from infrastructure.database.ops.plants import PlantOperations

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


class SQLiteDatabaseHandler(
    PlantOperations,
    InventoryOperations,
    DosageLogOperations,
):
    """Thread-safe SQLite handler decoupled from Flask globals."""

    def __init__(self, database_path: str) -> None:
        self._database_path = database_path
        self._local = threading.local()

        # Ensure the directory for the database file exists
        if database_path != MEMORY_DATABASE:
            db_path = Path(database_path)
            if not db_path.parent.exists():
                db_path.parent.mkdir(parents=True, exist_ok=True)
                logger.info("Created database directory: %s", db_path.parent)

    @property
    def database_path(self) -> str:
        return self._database_path

    # --- Lifecycle ------------------------------------------------------------
    def init_app(self, app: Flask | None = None) -> None:
        if app is not None:
            app.teardown_appcontext(self.close_db)
        self.create_tables()

    def get_db(self) -> sqlite3.Connection:
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is None:
            connection = self._open_connection()
            self._local.connection = connection
        return connection

    def _open_connection(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._database_path, check_same_thread=False)
        try:
            connection.row_factory = sqlite3.Row
            self._configure_connection(connection)
            return connection
        except Exception:
            connection.close()
            raise

    def _configure_connection(self, connection: sqlite3.Connection) -> None:
        """WAL journal, NORMAL sync, in-memory temp store."""
        if self._database_path != MEMORY_DATABASE:
            connection.execute("PRAGMA journal_mode=WAL")
        connection.execute("PRAGMA synchronous=NORMAL")
        connection.execute("PRAGMA temp_store=MEMORY")
        connection.commit()

    def close_db(self, _e: Optional[BaseException] = None) -> None:
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is not None:
            connection.close()
            delattr(self._local, "connection")

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        conn = self.get_db()
        try:
            yield conn
        finally:
            conn.commit()

    # --- Schema ----------------------------------------------------------------
    def create_tables(self) -> None:
        """Creates the necessary tables in the database if they do not already exist."""
        with self.connection() as db:
            # Plants (read side of the grow context)
            db.execute(
                """
                CREATE TABLE IF NOT EXISTS Plants (
                    plant_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    stage TEXT NOT NULL,
                    planted_date TEXT,
                    harvest_date TEXT,
                    created_at TEXT
                )
                """
            )
            # One row per BioBizz product
            db.execute(
                """
                CREATE TABLE IF NOT EXISTS ProductInventory (
                    product_id TEXT PRIMARY KEY,
                    owned INTEGER NOT NULL DEFAULT 0,
                    bottle_size REAL NOT NULL DEFAULT 1000,
                    current_ml REAL NOT NULL DEFAULT 0,
                    updated_at TEXT
                )
                """
            )
            db.execute(
                """
                CREATE TABLE IF NOT EXISTS DosageLogs (
                    log_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    week INTEGER NOT NULL,
                    substrate TEXT NOT NULL,
                    water_liters REAL NOT NULL,
                    total_ml REAL NOT NULL,
                    concentration_ml_per_liter REAL,
                    products TEXT,
                    status TEXT NOT NULL DEFAULT 'success',
                    triggered_by TEXT NOT NULL DEFAULT 'manual',
                    ec_before REAL,
                    ph_before REAL,
                    ec_after REAL,
                    ph_after REAL,
                    notes TEXT
                )
                """
            )
            db.execute("CREATE INDEX IF NOT EXISTS idx_dosage_logs_timestamp ON DosageLogs(timestamp)")
            db.execute("CREATE INDEX IF NOT EXISTS idx_dosage_logs_status ON DosageLogs(status)")
        logger.debug("Database tables ensured at %s", self._database_path)
