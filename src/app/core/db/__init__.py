"""Database utilities - engine, session, migrations."""

from src.app.core.db.engine import (
    create_engine_for_url,
    dispose_engine,
    get_engine,
    get_sync_engine,
)
from src.app.core.db.migrations import run_migrations_sync
from src.app.core.db.session import create_all, get_session

__all__ = [
    # Engine
    "create_engine_for_url",
    "dispose_engine",
    "get_engine",
    "get_sync_engine",
    # Session
    "create_all",
    "get_session",
    # Migrations
    "run_migrations_sync",
]
