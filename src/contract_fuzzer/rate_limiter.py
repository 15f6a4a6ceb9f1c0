"""Request pacing against a single target service."""

import asyncio
import threading
import time
from typing import Callable, Optional


class RateLimiter:
    """Grants at most ``max_per_minute`` permits per minute across all callers.

    Permits are spaced by a fixed interval of ``60 / max_per_minute`` seconds.
    Each caller reserves its slot under a lock (elapsed-time check, wait
    decision and timestamp update together) and then waits outside the lock,
    so threads and asyncio tasks can share one instance. Permit order between
    concurrent callers is not guaranteed, only the aggregate rate.

    Args:
        max_per_minute: Maximum permits per minute, must be positive
        clock: Monotonic time source in seconds
        sleep: Blocking sleep used by :meth:`acquire`
    """

    def __init__(
        self,
        max_per_minute: int,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_per_minute <= 0:
            raise ValueError(f"max_per_minute must be > 0, got {max_per_minute}")
        self.max_per_minute = max_per_minute
        self.interval = 60.0 / max_per_minute

        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_permit: Optional[float] = None

    def _reserve(self) -> float:
        """Claim the next permit slot and return how long to wait for it."""
        with self._lock:
            now = self._clock()
            if self._last_permit is None:
                wait = 0.0
            else:
                wait = max(0.0, self._last_permit + self.interval - now)
            self._last_permit = now + wait
            return wait

    def acquire(self) -> None:
        """Block the calling thread until a permit is available."""
        wait = self._reserve()
        if wait > 0:
            self._sleep(wait)

    async def acquire_async(self) -> None:
        """Suspend the calling task until a permit is available."""
        wait = self._reserve()
        if wait > 0:
            await asyncio.sleep(wait)
