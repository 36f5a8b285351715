"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
# In-memory SQLite so no external database is needed
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")

# ruff: noqa: E402 - Imports must be after env var setup
import pytest

from src.app.core import rate_limit
from src.app.core.config import get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def reset_rate_limit_buckets() -> None:
    """Reset rate limit in-memory state.

    Use this fixture when you need to ensure rate limit state is clean.
    """
    rate_limit.reset_rate_limits()
    yield
    rate_limit.reset_rate_limits()
