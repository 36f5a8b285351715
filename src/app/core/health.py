"""Liveness endpoint with a cached database probe, and Prometheus metrics."""

import asyncio
import time
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.app.core.config import get_settings
from src.app.core.db import get_session
from src.app.core.logging import get_logger
from src.app.core.shutdown import request_tracker

logger = get_logger(__name__)

HEALTH_CACHE_TTL = 10.0  # seconds


@dataclass
class _CachedProbe:
    body: dict[str, Any]
    checked_at: float


_cache: _CachedProbe | None = None


def reset_health_cache() -> None:
    """Drop the cached probe result (for testing)."""
    global _cache
    _cache = None


async def _probe_database() -> str:
    try:
        async with asyncio.timeout(get_settings().database_operation_timeout_seconds):
            async with get_session() as session:
                await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning("Database health probe failed", error=str(e))
        return f"unhealthy: {e!s}"
    return "healthy"


def _respond(body: dict[str, Any]) -> JSONResponse:
    status_code = 200 if body["status"] == "healthy" else 503
    return JSONResponse(content=body, status_code=status_code)


def setup_health_endpoint(app: FastAPI) -> None:
    """Register GET /health."""

    @app.get("/health", tags=["health"])
    async def health() -> JSONResponse:
        global _cache

        if request_tracker.is_shutting_down:
            return _respond(
                {
                    "status": "draining",
                    "in_flight_requests": request_tracker.in_flight_count,
                    "draining_for_seconds": round(request_tracker.draining_for or 0.0, 1),
                }
            )

        now = time.monotonic()
        if _cache is not None and now - _cache.checked_at < HEALTH_CACHE_TTL:
            return _respond(
                {
                    **_cache.body,
                    "cached": True,
                    "cache_age_seconds": round(now - _cache.checked_at, 1),
                }
            )

        database = await _probe_database()
        body = {
            "status": "healthy" if database == "healthy" else "unhealthy",
            "database": database,
            "cached": False,
        }
        _cache = _CachedProbe(body=body, checked_at=now)
        return _respond(body)


def setup_metrics(app: FastAPI) -> None:
    """Expose Prometheus metrics at /metrics."""
    Instrumentator().instrument(app).expose(app, endpoint="/metrics", tags=["health"])
