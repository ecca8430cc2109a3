"""Per-client rate limiting for scrape requests.

Every scrape costs one outbound request to a third-party site, so each
client gets a fixed number of scrapes per sliding window.
"""

import math
import time
from collections import defaultdict, deque
from threading import Lock
from typing import Callable, Deque

import logfire

from indiegrowth.config import get_settings


class ScrapeRateLimiter:
    """Thread-safe in-memory sliding-window limiter keyed by client id."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize rate limiter.

        Args:
            max_requests: Maximum allowed scrapes per window.
            window_seconds: Size of the sliding window in seconds.
            clock: Monotonic time source (injectable for tests).
        """
        self._requests: dict[str, Deque[float]] = defaultdict(deque)
        self._max_requests = max_requests
        self._window = window_seconds
        self._clock = clock
        self._lock = Lock()

    def _prune(self, client_id: str, now: float) -> Deque[float]:
        timestamps = self._requests[client_id]
        cutoff = now - self._window
        while timestamps and timestamps[0] <= cutoff:
            timestamps.popleft()
        return timestamps

    def check_rate_limit(self, client_id: str) -> bool:
        """Record a scrape for ``client_id`` if it is within its limit.

        Returns:
            True if allowed, False if the limit is exhausted.
        """
        now = self._clock()
        with self._lock:
            timestamps = self._prune(client_id, now)
            if len(timestamps) >= self._max_requests:
                logfire.warning(
                    "Scrape rate limit exceeded",
                    client_id=client_id,
                    request_count=len(timestamps),
                    max_requests=self._max_requests,
                    window_seconds=self._window,
                )
                return False
            timestamps.append(now)
            return True

    def get_remaining_requests(self, client_id: str) -> int:
        """Number of scrapes ``client_id`` may still make in this window."""
        with self._lock:
            timestamps = self._prune(client_id, self._clock())
            return max(0, self._max_requests - len(timestamps))

    def retry_after_seconds(self, client_id: str) -> int:
        """Seconds until the oldest recorded scrape leaves the window (0 if none)."""
        now = self._clock()
        with self._lock:
            timestamps = self._prune(client_id, now)
            if not timestamps:
                return 0
            return max(1, math.ceil(timestamps[0] + self._window - now))

    def reset(self, client_id: str | None = None) -> None:
        """Reset tracking for one client, or for everyone."""
        with self._lock:
            if client_id:
                self._requests.pop(client_id, None)
            else:
                self._requests.clear()


_rate_limiter: ScrapeRateLimiter | None = None


def get_rate_limiter() -> ScrapeRateLimiter:
    """Get the process-wide rate limiter, built from settings on first use."""
    global _rate_limiter
    if _rate_limiter is None:
        settings = get_settings()
        _rate_limiter = ScrapeRateLimiter(
            max_requests=settings.rate_limit_max_scrapes,
            window_seconds=settings.rate_limit_window_seconds,
        )
    return _rate_limiter


def reset_rate_limiter() -> None:
    """Drop the process-wide rate limiter (primarily for testing)."""
    global _rate_limiter
    _rate_limiter = None
