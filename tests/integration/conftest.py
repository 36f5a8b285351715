"""Integration test fixtures for database and HTTP client operations.

Every test gets a fresh in-memory SQLite database with the full schema.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.app.api.dependencies import get_db_session
from src.app.core import db
from src.app.core.db import create_all, create_engine_for_url, get_session
from src.app.core.shutdown import request_tracker
from src.app.main import create_app
from src.app.models import Technology, User
from src.app.repositories import (
    AssociationRepository,
    ProjectQueryRepository,
    ProjectRepository,
    TechnologyRepository,
    UserRepository,
)
from src.app.services import ProjectService, TechnologyService, UserService
from tests.factories import TechnologyFactory, UserFactory


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create an isolated in-memory database with all tables."""
    test_engine = create_engine_for_url("sqlite+aiosqlite:///:memory:")
    await create_all(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does not auto-commit. Services commit their own work;
    tests inserting rows directly must call `await session.commit()`.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
def project_service(db_session: AsyncSession) -> ProjectService:
    return ProjectService(
        ProjectRepository(db_session),
        AssociationRepository(db_session),
        ProjectQueryRepository(db_session),
        db_session,
    )


@pytest.fixture
def technology_service(db_session: AsyncSession) -> TechnologyService:
    return TechnologyService(
        TechnologyRepository(db_session), AssociationRepository(db_session), db_session
    )


@pytest.fixture
def user_service(db_session: AsyncSession) -> UserService:
    return UserService(UserRepository(db_session), AssociationRepository(db_session), db_session)


@pytest.fixture
def make_technology(db_session: AsyncSession) -> Callable[..., Awaitable[Technology]]:
    """Insert and commit a technology row."""

    async def _make(**kwargs) -> Technology:
        technology = TechnologyFactory.build(**kwargs)
        db_session.add(technology)
        await db_session.commit()
        return technology

    return _make


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Insert and commit a user row."""

    async def _make(**kwargs) -> User:
        user = UserFactory.build(**kwargs)
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """Create test client whose requests use the test database."""
    await db.dispose_engine()
    request_tracker.reset()

    async def _test_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    app = create_app()
    app.dependency_overrides[get_db_session] = _test_session
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    await db.dispose_engine()

