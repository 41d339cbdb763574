from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

MIGRATION_DIR = Path(__file__).resolve().parents[1] / "migration"


def run_migrations(db_url: str, script_location: Path | None = None) -> None:
    """Upgrade the database at `db_url` to the latest schema revision."""
    script_location = script_location or MIGRATION_DIR
    alembic_ini = script_location / "alembic.ini"
    if not script_location.exists():
        raise RuntimeError(f"Alembic script_location missing: {script_location}")
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(script_location))
    cfg.set_main_option("sqlalchemy.url", db_url)
    # keep the application's logging setup
    cfg.attributes["configure_logger"] = False

    logger.info("Running migrations against %s", db_url)
    command.upgrade(cfg, "head")
