"""In-flight request accounting for graceful shutdown."""

import asyncio
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.app.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """Counts requests currently being served and signals when none remain.

    All mutation happens on the event loop thread, so the counter needs no
    lock.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Forget all state. For testing only."""
        self._in_flight = 0
        self._draining_since: float | None = None
        self._drained = asyncio.Event()

    @property
    def is_shutting_down(self) -> bool:
        return self._draining_since is not None

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @property
    def draining_for(self) -> float | None:
        """Seconds since shutdown started, or None while serving normally."""
        if self._draining_since is None:
            return None
        return time.monotonic() - self._draining_since

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1
            self._signal_if_drained()

    def _signal_if_drained(self) -> None:
        if self.is_shutting_down and self._in_flight == 0 and not self._drained.is_set():
            logger.info("All requests drained")
            self._drained.set()

    async def start_shutdown(self) -> None:
        """Stop accepting the service as healthy and start draining."""
        if self._draining_since is None:
            self._draining_since = time.monotonic()
            logger.info("Draining requests", in_flight=self._in_flight)
        self._signal_if_drained()

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait until no request is in flight.

        Returns:
            True if everything finished within `timeout` seconds.
        """
        try:
            async with asyncio.timeout(timeout):
                await self._drained.wait()
        except TimeoutError:
            logger.warning(
                "Requests still in flight after drain timeout",
                timeout_seconds=timeout,
                in_flight=self._in_flight,
            )
            return False
        return True


request_tracker = RequestTracker()
