"""
Rate Limiter

In-memory, per-key attempt counter over a fixed window anchored at the first
attempt. Process-local: each worker process keeps its own counts. Expired
entries are swept at most once per window.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict

from todo_auth.domain.constants import RATE_LIMIT_MAX_ATTEMPTS, RATE_LIMIT_WINDOW


@dataclass
class RateLimitEntry:
    count: int
    first_attempt: float


class RateLimiter:
    """
    Login attempt limiter keyed by email.

    Increment-and-compare happens under a lock, so counts stay exact whether
    callers run on the event loop or in threadpool workers.
    """

    def __init__(
        self,
        max_attempts: int = RATE_LIMIT_MAX_ATTEMPTS,
        window_seconds: float = RATE_LIMIT_WINDOW.total_seconds(),
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._clock = clock
        self._attempts: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def tracked_keys(self) -> int:
        """Number of keys currently holding an attempt window"""
        return len(self._attempts)

    def _is_expired(self, entry: RateLimitEntry, now: float) -> bool:
        return now - entry.first_attempt > self.window_seconds

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep <= self.window_seconds:
            return
        self._attempts = {
            key: entry
            for key, entry in self._attempts.items()
            if not self._is_expired(entry, now)
        }
        self._last_sweep = now

    def check_rate_limit(self, key: str) -> bool:
        """
        Record an attempt for key.

        Returns:
            True if the attempt is allowed, False once max_attempts is exceeded
            within the current window
        """
        now = self._clock()
        with self._lock:
            self._sweep(now)
            entry = self._attempts.get(key)

            if entry is None or self._is_expired(entry, now):
                self._attempts[key] = RateLimitEntry(count=1, first_attempt=now)
                return True

            entry.count += 1
            return entry.count <= self.max_attempts

    def clear_rate_limit(self, key: str) -> None:
        with self._lock:
            self._attempts.pop(key, None)
