"""
System Health Endpoints
=======================

Liveness and database checks.
"""

from __future__ import annotations

import logging
import sqlite3

from flask import Blueprint, Response

from app.blueprints.api._common import (
    fail as _fail,
    get_database as _database,
    success as _success,
)
from app.utils.http import safe_route
from app.utils.time import iso_now

logger = logging.getLogger("health_api")


def register_system_routes(health_api: Blueprint):
    """Register system health routes on the blueprint."""

    @health_api.get("/ping")
    @safe_route("Failed to handle ping request")
    def ping() -> Response:
        """
        Basic liveness check for monitoring tools.

        Returns:
            {"status": "ok", "timestamp": "..."}
        """
        return _success({"status": "ok", "timestamp": iso_now()})

    @health_api.get("/database")
    @safe_route("Failed to check database health")
    def database_health() -> Response:
        """Run a trivial query against the configured database."""
        try:
            _database().get_db().execute("SELECT 1").fetchone()
        except sqlite3.Error as exc:
            logger.warning("Database health check failed: %s", exc)
            return _fail("Database unavailable", 503)
        return _success({"status": "ok", "timestamp": iso_now()})
