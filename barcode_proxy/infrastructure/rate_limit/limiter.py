import asyncio
import time
from typing import Awaitable, Callable, Optional

from barcode_proxy.core.logging import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    Process-wide throttle for outbound provider calls.

    Guarantees that two consecutive permitted calls are at least
    ``min_interval`` seconds apart. The timestamp check, the wait and the
    timestamp update all happen under one ``asyncio.Lock``, so concurrent
    callers queue up and each observes the timestamp written by the one
    before it.
    """

    def __init__(
        self,
        min_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        """
        Initialize the limiter.

        Args:
            min_interval: Minimum seconds between permitted calls, 0 disables throttling
            clock: Monotonic time source
            sleep: Coroutine used to wait
        """
        if min_interval < 0:
            raise ValueError("min_interval must be zero or positive")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_call: Optional[float] = None
        self.total_waited = 0.0

    @property
    def last_call(self) -> Optional[float]:
        """Clock time of the last permitted call, None before the first."""
        return self._last_call

    async def acquire(self) -> float:
        """
        Wait until a call is permitted and record it.

        Returns:
            float: Seconds spent waiting
        """
        async with self._lock:
            now = self._clock()
            waited = 0.0
            if self._last_call is not None and self.min_interval > 0:
                elapsed = now - self._last_call
                while elapsed < self.min_interval:
                    remaining = self.min_interval - elapsed
                    logger.debug(f"Rate limit: waiting {remaining * 1000:.0f}ms before outbound call")
                    await self._sleep(remaining)
                    waited += remaining
                    now = self._clock()
                    elapsed = now - self._last_call
            self._last_call = now
            self.total_waited += waited
            return waited

    async def __aenter__(self) -> "RateLimiter":
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    def get_stats(self) -> dict:
        return {
            "min_interval_ms": round(self.min_interval * 1000),
            "total_waited_ms": round(self.total_waited * 1000, 2),
        }
