"""
Minimum-interval rate limiter for outbound provider calls.

One limiter is owned by each NewsFetcher. The check-then-update of the last
call time happens under a lock, so concurrent refreshes are serialized rather
than both slipping through the same window.
"""

import threading
import time
from typing import Callable, Optional


class RateLimiter:
    def __init__(
        self,
        requests_per_hour: float = 200,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if requests_per_hour <= 0:
            raise ValueError("requests_per_hour must be positive")
        self.min_interval = 3600.0 / requests_per_hour
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None
        self._lock = threading.Lock()

    @classmethod
    def unlimited(cls) -> "RateLimiter":
        """A limiter that never waits (useful for tests and one-shot scripts)."""
        limiter = cls(requests_per_hour=1)
        limiter.min_interval = 0.0
        return limiter

    def await_turn(self) -> float:
        """Block until the next call is allowed; return the seconds waited."""
        with self._lock:
            waited = 0.0
            if self._last_call is not None:
                elapsed = self._clock() - self._last_call
                if elapsed < self.min_interval:
                    waited = self.min_interval - elapsed
                    self._sleep(waited)
            self._last_call = self._clock()
            return waited
