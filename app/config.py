"""
Configuration for GrowDose
==========================
Main application runtime settings loaded from ``GROWDOSE_*`` environment
variables. Sets up the logging configuration as well.

The sensor thresholds and the feeding schedule are fixed constants (see
``app/constants.py``) and are deliberately not part of this configuration.
"""

import logging
import os
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any

from app.constants import DEFAULT_BOTTLE_SIZE_ML, STATS_DEFAULT_DAYS, DosingLimits, Pagination, SubstrateConfig


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number.") from None


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("GROWDOSE_ENV", "development"))
    secret_key: str = field(default_factory=lambda: os.getenv("GROWDOSE_SECRET_KEY", "GrowDoseDevSecretKey"))
    database_path: str = field(default_factory=lambda: os.getenv("GROWDOSE_DATABASE_PATH", "database/growdose.db"))

    DEBUG: bool = field(default_factory=lambda: _env_bool("GROWDOSE_DEBUG", False))
    log_level: str = field(default_factory=lambda: os.getenv("GROWDOSE_LOG_LEVEL", "INFO"))
    log_dir: str = field(default_factory=lambda: os.getenv("GROWDOSE_LOG_DIR", "logs"))
    log_to_file: bool = field(default_factory=lambda: _env_bool("GROWDOSE_LOG_TO_FILE", True))
    audit_log_path: str = field(default_factory=lambda: os.getenv("GROWDOSE_AUDIT_LOG_PATH", "logs/audit.log"))

    # Dosing defaults
    default_substrate: str = field(
        default_factory=lambda: os.getenv("GROWDOSE_DEFAULT_SUBSTRATE", SubstrateConfig.DEFAULT_KEY)
    )
    default_bottle_size_ml: int = field(
        default_factory=lambda: _env_int("GROWDOSE_DEFAULT_BOTTLE_SIZE_ML", DEFAULT_BOTTLE_SIZE_ML)
    )
    min_tank_liters: float = field(
        default_factory=lambda: _env_float("GROWDOSE_MIN_TANK_LITERS", DosingLimits.MIN_TANK_LITERS)
    )
    max_tank_liters: float = field(
        default_factory=lambda: _env_float("GROWDOSE_MAX_TANK_LITERS", DosingLimits.MAX_TANK_LITERS)
    )

    # Dosing log
    stats_default_days: int = field(default_factory=lambda: _env_int("GROWDOSE_STATS_DEFAULT_DAYS", STATS_DEFAULT_DAYS))
    logs_page_size: int = field(
        default_factory=lambda: _env_int("GROWDOSE_LOGS_PAGE_SIZE", Pagination.DEFAULT_PAGE_SIZE)
    )

    # Upload / request size limits
    max_upload_mb: int = field(default_factory=lambda: _env_int("GROWDOSE_MAX_UPLOAD_MB", 1))

    # Default insecure secret key - used only for detection
    _DEFAULT_SECRET_KEY: str = field(default="GrowDoseDevSecretKey", init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # SECURITY: Fail fast if using default secret key in production
        if self.environment == "production" and self.secret_key == self._DEFAULT_SECRET_KEY:
            raise RuntimeError(
                "SECURITY ERROR: Cannot use default secret key in production!\n"
                "Set GROWDOSE_SECRET_KEY environment variable to a secure random value.\n"
                'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"'
            )
        if SubstrateConfig.get(self.default_substrate) is None:
            raise ValueError(
                f"GROWDOSE_DEFAULT_SUBSTRATE must be one of "
                f"{[s.key for s in SubstrateConfig.list_all()]}, got {self.default_substrate!r}"
            )
        if self.min_tank_liters <= 0 or self.max_tank_liters < self.min_tank_liters:
            raise ValueError("Tank limits must satisfy 0 < GROWDOSE_MIN_TANK_LITERS <= GROWDOSE_MAX_TANK_LITERS.")

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        secret = self.secret_key or os.getenv("FLASK_SECRET_KEY", "")
        if not secret:
            raise RuntimeError(
                "Missing GROWDOSE_SECRET_KEY or FLASK_SECRET_KEY environment variable. "
                "Production systems must set an explicit secret key."
            )

        return {
            "ENV": self.environment,
            "SECRET_KEY": secret,
            "DATABASE_PATH": self.database_path,
            "AUDIT_LOG_PATH": self.audit_log_path,
            "DEBUG": self.DEBUG,
            "MAX_CONTENT_LENGTH": self.max_upload_mb * 1024 * 1024,
        }


def setup_logging(debug: bool = False, *, log_dir: str = "logs", to_file: bool = True, level: str = "INFO") -> None:
    """Setup logging configuration."""
    import sys
    from logging.handlers import RotatingFileHandler

    log_level = logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO)

    # Root logger
    root = logging.getLogger()
    root.setLevel(log_level)

    # Keep existing handlers but avoid adding duplicates when create_app is called multiple times
    has_console = any(getattr(h, "name", "") == "growdose_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "growdose_file" for h in root.handlers)
    added_handler = False

    # Console handler (force UTF-8 to avoid UnicodeEncodeError on Windows terminals)
    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "growdose_console"
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    # File handler
    if to_file and not has_file:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "growdose.log"),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "growdose_file"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    # Ensure handler levels follow the desired log level
    for handler in root.handlers:
        if getattr(handler, "name", "") in {"growdose_console", "growdose_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info("Logging initialized at level: %s", logging.getLevelName(log_level))

    if _env_bool("GROWDOSE_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    config = AppConfig()
    logging.getLogger("config_loader").debug(
        "Loaded configuration (env=%s, database=%s)", config.environment, config.database_path
    )
    return config
