"""Database engine management."""

from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from src.app.core.config import get_settings

_engine: AsyncEngine | None = None


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on FK enforcement for every new SQLite connection.

    SQLite ships with foreign keys disabled; cascades declared on the
    association tables would otherwise be ignored.
    """

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection: Any, _connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _get_engine_kwargs(database_url: str) -> dict[str, Any]:
    """Get pool arguments appropriate for the configured backend."""
    settings = get_settings()
    if database_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url:
            # A single shared connection, otherwise each checkout sees an empty DB
            kwargs["poolclass"] = StaticPool
        return kwargs

    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_pre_ping": True,
    }


def create_engine_for_url(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine, applying backend-specific setup."""
    engine = create_async_engine(database_url, echo=echo, **_get_engine_kwargs(database_url))
    if engine.dialect.name == "sqlite":
        _enable_sqlite_foreign_keys(engine.sync_engine)
    return engine


def get_engine() -> AsyncEngine:
    """Get or create the database engine singleton."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine_for_url(settings.database_url, echo=settings.database_echo)
    return _engine


async def dispose_engine() -> None:
    """Dispose the database engine. Call during shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


def get_sync_engine(database_url: str) -> Engine:
    """Create a synchronous engine for Alembic migrations.

    Converts async driver URLs to their sync counterparts
    (asyncpg -> psycopg2, aiosqlite -> pysqlite).
    """
    sync_url = database_url.replace("+asyncpg", "").replace("+aiosqlite", "")
    engine = create_engine(sync_url, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        _enable_sqlite_foreign_keys(engine)
    return engine
