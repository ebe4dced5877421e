"""In-flight request accounting used to drain the server on shutdown."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.vfxflow.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """Counts requests in progress and signals once they have all finished."""

    def __init__(self) -> None:
        self._active = 0
        self._draining = False
        self._lock = asyncio.Lock()
        self._drained = asyncio.Event()

    @property
    def is_shutting_down(self) -> bool:
        return self._draining

    @property
    def in_flight_count(self) -> int:
        return self._active

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        async with self._lock:
            self._active += 1
        try:
            yield
        finally:
            async with self._lock:
                self._active -= 1
                if self._draining and self._active == 0:
                    self._drained.set()

    async def start_shutdown(self) -> None:
        """Stop counting new work as routine and arm the drain signal."""
        self._draining = True
        async with self._lock:
            logger.info("Draining requests", in_flight=self._active)
            if self._active == 0:
                self._drained.set()

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds for in-flight requests to finish.

        Returns:
            True if every request completed in time
        """
        try:
            await asyncio.wait_for(self._drained.wait(), timeout=timeout)
        except TimeoutError:
            logger.warning("Shutdown timed out", timeout=timeout, in_flight=self._active)
            return False
        logger.info("All requests drained")
        return True

    def reset(self) -> None:
        """Reset tracker state. For testing only."""
        self._active = 0
        self._draining = False
        self._drained = asyncio.Event()


request_tracker = RequestTracker()
