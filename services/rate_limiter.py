"""
Fixed-window request counter keyed by client identifier (usually the IP).

Counters live in process memory, so limits apply per replica.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict
import logging

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    """Allows `max_requests` per key in each `window_seconds` window"""

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.time,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        """Count one request for `key` and report whether it is within quota"""
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)

            if window is None or now > window.reset_at:
                self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
                return True

            if window.count >= self.max_requests:
                logger.warning(f"Rate limit exceeded for {key}")
                return False

            window.count += 1
            return True

    def remaining(self, key: str) -> int:
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now > window.reset_at:
                return self.max_requests
            return max(0, self.max_requests - window.count)

    def reset_at(self, key: str) -> float:
        """Epoch seconds when the current window closes, 0 if none is open"""
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now > window.reset_at:
                return 0
            return window.reset_at

    def purge_expired(self) -> int:
        """Drop closed windows, return how many were removed"""
        now = self._clock()
        with self._lock:
            expired = [key for key, window in self._windows.items() if now > window.reset_at]
            for key in expired:
                del self._windows[key]
        if expired:
            logger.debug(f"Purged {len(expired)} expired rate limit windows")
        return len(expired)
