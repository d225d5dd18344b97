# src/inkpost/scripts/migrate.py
"""Apply Alembic migrations up to head."""
from __future__ import annotations

import os

from alembic import command
from alembic.config import Config

from inkpost.core.settings import Settings

MIGRATIONS_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations"))


def run_upgrade_head(settings: Settings) -> None:
    """Upgrade the configured database to the newest revision."""
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    cfg.attributes["settings"] = settings
    command.upgrade(cfg, "head")


if __name__ == "__main__":
    run_upgrade_head(Settings())  # type: ignore[call-arg]
