"""
Minimum-spacing rate limiter for outbound search calls.

One instance is shared by every request the process serves. The lock is held
across the wait so callers go through in the order they reached the limiter.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class RateLimiter:
    """Make sure consecutive wait() calls return at least min_interval seconds apart."""

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_call: float | None = None
        self._lock = asyncio.Lock()

    @property
    def last_call(self) -> float | None:
        return self._last_call

    async def wait(self) -> None:
        async with self._lock:
            if self._last_call is not None:
                delay = self.min_interval - (self._clock() - self._last_call)
                if delay > 0:
                    logger.info("[rate_limiter:wait] sleeping %.3fs", delay)
                    await self._sleep(delay)
            self._last_call = self._clock()
