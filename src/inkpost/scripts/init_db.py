# src/inkpost/scripts/init_db.py
"""Create all tables directly from the ORM metadata (development only)."""

from inkpost.core.settings import Settings
from inkpost.db.session import build_engine, create_tables


def init_db(settings: Settings) -> None:
    """Initialize the database by creating all tables."""
    engine = build_engine(settings.database_url)
    try:
        create_tables(engine)
    finally:
        engine.dispose()


if __name__ == "__main__":
    init_db(Settings())  # type: ignore[call-arg]
    print("Database initialized.")
