"""Rate limiting configuration.

Provides two layers of rate limiting:
1. Global middleware: token bucket per client IP applied to every request
2. Endpoint decorators: slowapi limits on the mutating endpoints

Both use in-process storage, so limits are per worker process.
"""

import asyncio
import time
from dataclasses import dataclass

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from src.app.core.config import get_settings
from src.app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class TokenBucket:
    """Per-client bucket refilled continuously at `rate` tokens per second."""

    tokens: float
    last_update: float

    def take(self, rate: float, burst: float, now: float) -> bool:
        """Refill for the time elapsed, then spend one token if available."""
        elapsed = max(0.0, now - self.last_update)
        self.tokens = min(burst, self.tokens + elapsed * rate)
        self.last_update = now
        if self.tokens >= 1:
            self.tokens -= 1
            return True
        return False


_rate_limit_buckets: dict[str, TokenBucket] = {}
_rate_limit_lock = asyncio.Lock()

EXEMPT_PATHS = ("/health", "/metrics", "/docs", "/openapi.json", "/redoc")


def get_rate_limit_key(request: Request) -> str:
    """Generate rate limit key from client IP only.

    Never include client-controlled headers in the key: rotating them would
    create unlimited fresh buckets.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create the slowapi limiter. Disabled in testing environment."""
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


def write_rate_limit() -> str:
    return get_settings().write_rate_limit


# Reads settings at import time; reconfiguration needs a restart
limiter = create_limiter()


async def _check_global_rate_limit(client_ip: str) -> bool:
    """Token bucket check. Returns True if the request is allowed."""
    settings = get_settings()
    if settings.app_env == "testing":
        return True

    burst = float(settings.global_rate_limit_burst)
    now = time.monotonic()

    async with _rate_limit_lock:
        bucket = _rate_limit_buckets.get(client_ip)
        if bucket is None:
            bucket = _rate_limit_buckets[client_ip] = TokenBucket(tokens=burst, last_update=now)
        return bucket.take(settings.global_rate_limit_per_second, burst, now)


def reset_rate_limits() -> None:
    """Forget every bucket. For testing only."""
    _rate_limit_buckets.clear()


async def global_rate_limit_middleware(
    request: Request,
    call_next: object,  # type: ignore[type-arg]
) -> JSONResponse:
    """Global per-IP rate limiting. Monitoring and docs paths are exempt."""
    if request.url.path in EXEMPT_PATHS:
        return await call_next(request)  # type: ignore[misc, operator, no-any-return]

    client_ip = get_rate_limit_key(request)

    if not await _check_global_rate_limit(client_ip):
        logger.warning(
            "Global rate limit exceeded",
            client_ip=client_ip,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=429,
            content={
                "detail": "Too many requests. Please slow down.",
                "retry_after": 1,
            },
            headers={"Retry-After": "1"},
        )

    return await call_next(request)  # type: ignore[misc, operator, no-any-return]
