# tests/test_settings.py
"""Tests for configuration and the migration entry point."""

from sqlalchemy import create_engine, inspect

from inkpost.core.settings import Settings
from inkpost.scripts.migrate import run_upgrade_head


def test_migration_url_defaults_to_database_url(monkeypatch) -> None:
    monkeypatch.delenv("ALEMBIC_URL", raising=False)
    settings = Settings(secret_key="k", database_url="postgresql+asyncpg://app@db/blog")
    assert settings.migration_url == "postgresql+psycopg://app@db/blog"


def test_migration_url_prefers_alembic_url() -> None:
    settings = Settings(
        secret_key="k",
        database_url="postgresql+psycopg://app@db/blog",
        alembic_url="postgresql+psycopg://owner@db/blog",
    )
    assert settings.migration_url == "postgresql+psycopg://owner@db/blog"


def test_alembic_url_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("ALEMBIC_URL", "sqlite:///./from-env.db")
    assert Settings(secret_key="k").migration_url == "sqlite:///./from-env.db"


def test_upgrade_head_creates_schema(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("ALEMBIC_URL", raising=False)
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    run_upgrade_head(Settings(secret_key="k", database_url=url))

    engine = create_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {"user_account", "post", "post_like", "post_comment", "comment", "image"} <= tables
