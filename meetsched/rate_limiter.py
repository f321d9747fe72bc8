"""Token-bucket throttle for People API paging."""

from __future__ import annotations

import time
from typing import Callable


class RateLimiter:
    """Allow up to ``rate`` acquisitions per second, bursting to ``burst``.

    ``clock`` and ``sleep`` default to :func:`time.monotonic` and
    :func:`time.sleep`.
    """

    def __init__(
        self,
        rate: float,
        burst: int | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if rate <= 0:
            raise ValueError(f"rate must be positive, got {rate}")
        self.rate = rate
        self.burst = burst if burst is not None else max(1, int(rate))
        self._clock = clock
        self._sleep = sleep
        self.tokens = float(self.burst)
        self.last_refill = clock()

    def _refill(self) -> None:
        now = self._clock()
        self.tokens = min(self.burst, self.tokens + (now - self.last_refill) * self.rate)
        self.last_refill = now

    def acquire(self) -> None:
        """Block until a token is available."""
        while True:
            self._refill()
            if self.tokens >= 1.0:
                self.tokens -= 1.0
                return
            self._sleep((1.0 - self.tokens) / self.rate)
