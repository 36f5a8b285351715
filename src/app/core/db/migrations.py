"""Programmatic Alembic entry point."""

from pathlib import Path

from alembic import command
from alembic.config import Config

from src.app.core.config import get_settings

ALEMBIC_DIR = Path(__file__).resolve().parents[3] / "alembic"


def get_alembic_config(database_url: str | None = None) -> Config:
    """Build an Alembic config without requiring alembic.ini."""
    settings = get_settings()
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.set_main_option(
        "sqlalchemy.url",
        database_url or settings.database_migrations_url or settings.database_url,
    )
    return config


def run_migrations_sync(revision: str = "head", database_url: str | None = None) -> None:
    """Upgrade the database schema. Blocking; run via asyncio.to_thread from async code."""
    command.upgrade(get_alembic_config(database_url), revision)
