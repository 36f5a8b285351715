import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.app.api.middlewares import setup_middlewares
from src.app.api.v1.router import api_router
from src.app.core.config import get_settings
from src.app.core.db import create_all, dispose_engine, get_session, run_migrations_sync
from src.app.core.exceptions import setup_exception_handlers
from src.app.core.health import setup_health_endpoint, setup_metrics
from src.app.core.logging import get_logger, setup_logging
from src.app.core.rate_limit import limiter
from src.app.core.seed import seed_sample_data
from src.app.core.shutdown import request_tracker

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    if settings.database_run_migrations:
        await asyncio.to_thread(run_migrations_sync)
        logger.info("Database migrations applied")
    elif settings.database_create_tables:
        await create_all()
        logger.info("Database tables ensured")

    if settings.seed_sample_data:
        async with get_session() as session:
            await seed_sample_data(session)

    yield

    # Graceful shutdown with proper request draining
    grace_period = settings.shutdown_grace_period
    logger.info("Shutdown initiated", in_flight=request_tracker.in_flight_count)

    # /health reports "draining" from here on
    await request_tracker.start_shutdown()

    drained = await request_tracker.wait_for_drain(timeout=grace_period)
    if not drained:
        logger.warning(
            "Shutdown grace period expired",
            grace_period_seconds=grace_period,
            in_flight=request_tracker.in_flight_count,
        )

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Projects with their technologies and users"},
    {"name": "technologies", "description": "Technology catalog"},
    {"name": "users", "description": "Users that can be attached to projects"},
    {"name": "health", "description": "Liveness and metrics"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Catalog of projects, the technologies they use and the people behind them",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    # Exception handlers to include request_id in error responses
    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    setup_middlewares(app, settings)

    app.include_router(api_router)

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
