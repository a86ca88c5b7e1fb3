"""Centralized exception hierarchy for GrowDose.

All domain and service exceptions inherit from :class:`GrowDoseError` so that
callers can catch a single base class when they need a broad safety net, yet
still match on specific subclasses where narrower handling is appropriate.

The pure dosing core (schedule, dosage, status, recommendations) never raises
for out-of-range input; it falls back to well-defined defaults instead. These
exceptions belong to the service and persistence layers.

Blueprint-level error handling (see ``app/utils/http.safe_route``) maps these
to the correct HTTP status codes automatically.

Hierarchy
---------
::

    GrowDoseError (base, maps to 500)
    ├── ValidationError          (400, bad input from caller)
    ├── NotFoundError            (404, entity does not exist)
    └── RepositoryError          (500, database / persistence)
"""

from __future__ import annotations


class GrowDoseError(Exception):
    """Base exception for all GrowDose application errors.

    Parameters
    ----------
    message:
        Human-readable description (logged server-side, **not** leaked to
        the HTTP client for 5xx errors).
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    http_status: int = 500

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(GrowDoseError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400


class NotFoundError(GrowDoseError):
    """Requested entity does not exist (HTTP 404)."""

    http_status: int = 404


# ── Server errors (5xx) ──────────────────────────────────────────────


class RepositoryError(GrowDoseError):
    """Database / persistence layer failure (HTTP 500)."""

    http_status: int = 500
