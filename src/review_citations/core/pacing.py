"""Minimum-interval pacing for outbound requests."""

import asyncio
import time
from typing import Awaitable, Callable, Optional


class RequestPacer:
    """Enforce a minimum delay between consecutive outbound requests.

    Holds the time of the last outbound call. ``clock`` and ``sleep`` can be
    replaced in tests with a fake clock.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval < 0:
            raise ValueError("Pacing interval cannot be negative")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None

    @property
    def last_call(self) -> Optional[float]:
        return self._last_call

    def delay_needed(self) -> float:
        """Seconds to wait before the next request may go out."""
        if self._last_call is None:
            return 0.0
        elapsed = self._clock() - self._last_call
        return max(0.0, self.interval - elapsed)

    async def acquire(self) -> float:
        """Wait out the remaining interval, then record the call time.

        Returns:
            Seconds spent waiting
        """
        waited = 0.0
        delay = self.delay_needed()
        # Sleep may return early on coarse clocks
        while delay > 0:
            await self._sleep(delay)
            waited += delay
            delay = self.delay_needed()
        self._last_call = self._clock()
        return waited
