"""Startup schema upgrades for server databases.

SQLite deployments build their tables from the ORM metadata; every other
database is brought to the Alembic head revision when the app boots, unless
``DISABLE_AUTO_MIGRATIONS`` is set.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def migrations_disabled() -> bool:
    return os.getenv("DISABLE_AUTO_MIGRATIONS", "").strip().lower() in {"1", "true", "yes", "on"}


def alembic_config(database_url: str) -> Config:
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("sqlalchemy.url", database_url)
    # Absolute so the app can start from any working directory.
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return config


def run_migrations_if_needed(*, database_url: str) -> bool:
    """Upgrade the schema to head; returns False when skipped."""

    if migrations_disabled():
        logger.info("DISABLE_AUTO_MIGRATIONS set; leaving the schema untouched")
        return False

    if not (PROJECT_ROOT / "alembic.ini").exists():
        logger.warning("No alembic.ini under %s; skipping schema upgrade", PROJECT_ROOT)
        return False

    logger.info("Upgrading database schema to the latest revision")
    command.upgrade(alembic_config(database_url), "head")
    return True


__all__ = ["alembic_config", "migrations_disabled", "run_migrations_if_needed"]
