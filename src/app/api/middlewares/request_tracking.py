"""Counts in-flight API requests so shutdown can drain them."""

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.app.core.shutdown import request_tracker

# Probes keep answering while draining and must not hold shutdown open
UNTRACKED_PATHS = frozenset({"/health", "/metrics"})


async def request_tracking_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    if request.url.path in UNTRACKED_PATHS:
        return await call_next(request)

    async with request_tracker.track_request():
        return await call_next(request)
