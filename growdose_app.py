"""WSGI entry point for the GrowDose backend application.

Used both in development (``growdose-backend``) and behind a WSGI server
(``growdose_app:app``). Configuration comes from ``GROWDOSE_*`` environment
variables.
"""
from __future__ import annotations

import logging
import os

from app import create_app

app = create_app(install_signal_handlers=True)


def _env_flag_true(name: str) -> bool:
    v = os.getenv(name)
    return bool(v and v.lower() in ("1", "true", "yes", "on"))


def main() -> int:
    host = os.getenv("GROWDOSE_HOST", "0.0.0.0")
    port = int(os.getenv("GROWDOSE_PORT", "8000"))
    debug = _env_flag_true("GROWDOSE_DEBUG")

    logging.info("Starting server on %s:%s", host, port)

    try:
        app.run(host=host, port=port, debug=debug, use_reloader=False)
        logging.info("Server stopped.")
        return 0
    except KeyboardInterrupt:
        logging.info("Server stopped by user.")
        return 0
    except Exception as exc:  # pragma: no cover - top-level runtime errors
        logging.exception("ERROR: Failed to start server: %s", exc)
        return 1


if __name__ == "__main__":
    # Mirrors the `growdose-backend` console script
    raise SystemExit(main())
