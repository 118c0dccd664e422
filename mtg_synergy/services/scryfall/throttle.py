"""
Outbound request throttle for the Scryfall API.

Scryfall asks for 50-100ms between requests. One FetchThrottle instance is
shared by every lookup in the process.
"""

import asyncio
import time
from typing import Awaitable, Callable


class FetchThrottle:
    """
    Minimum-interval gate on outbound requests.

    acquire() returns only once `min_interval` seconds have passed since the
    previous acquire() returned. The wait-and-stamp sequence runs under a lock,
    so concurrent callers are admitted one at a time in arrival order.
    """

    def __init__(
        self,
        min_interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request_time = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until the next outbound request is allowed."""
        async with self._lock:
            if self._last_request_time is not None:
                elapsed = self._clock() - self._last_request_time
                if elapsed < self.min_interval:
                    await self._sleep(self.min_interval - elapsed)

            self._last_request_time = self._clock()
