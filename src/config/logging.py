"""Logging configuration for catalog search processes."""

from __future__ import annotations

import logging
import os

# Field-elision warnings and skipped fetch hints are logged under this package.
CRITERIA_LOGGER = "src.criteria"


def configure_logging(level: str | None = None, *, criteria_level: str | None = None) -> None:
    """Configure Python logging for the process.

    `criteria_level` overrides the level of the criteria compiler loggers only, e.g. `DEBUG` to see
    which eager fetches were skipped without turning on debug logs everywhere. Bound query
    parameters are never logged; only shapes, counts and latencies are.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if criteria_level is not None:
        logging.getLogger(CRITERIA_LOGGER).setLevel(criteria_level.upper())

    # Reduce noisy third-party logs by default.
    logging.getLogger("psycopg.pool").setLevel(logging.WARNING)
