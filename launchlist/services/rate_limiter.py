# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Sliding-window limiter for failed admin logins, keyed by client IP."""
import threading
import time
from typing import Callable

from launchlist.core.logging import get_logger

logger = get_logger(__name__)

SWEEP_EVERY = 256


class LoginAttemptLimiter:
    """
    Each attempt is recorded before credentials are checked and cleared again
    on success, so whatever remains in the window is the failure count.
    Check-and-record happens under one lock per limiter. Keys whose attempts
    have all left the window are dropped, on access and by a periodic sweep.
    """

    def __init__(self, max_failures: int, window_seconds: int = 900,
                 clock: Callable[[], float] = time.monotonic,
                 sweep_every: int = SWEEP_EVERY):
        self.max_failures = max_failures
        self.window = window_seconds
        self._clock = clock
        self._sweep_every = max(sweep_every, 1)
        self._calls = 0
        self._attempts: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.max_failures > 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._attempts)

    def try_acquire(self, key: str) -> tuple[bool, int]:
        """Returns (allowed, retry_after_seconds)."""
        if not self.enabled:
            return True, 0
        with self._lock:
            now = self._clock()
            cutoff = now - self.window
            self._calls += 1
            if self._calls % self._sweep_every == 0:
                self._sweep(cutoff)
            timestamps = [t for t in self._attempts.get(key, []) if t > cutoff]
            if len(timestamps) >= self.max_failures:
                self._attempts[key] = timestamps
                retry_after = int(timestamps[0] - cutoff) + 1
                return False, retry_after
            timestamps.append(now)
            self._attempts[key] = timestamps
            return True, 0

    def reset(self, key: str) -> None:
        with self._lock:
            self._attempts.pop(key, None)

    def failures(self, key: str) -> int:
        with self._lock:
            cutoff = self._clock() - self.window
            live = [t for t in self._attempts.get(key, []) if t > cutoff]
            if live:
                self._attempts[key] = live
            else:
                self._attempts.pop(key, None)
            return len(live)

    def _sweep(self, cutoff: float) -> None:
        # Caller holds the lock.
        stale = [k for k, stamps in self._attempts.items() if not stamps or stamps[-1] <= cutoff]
        for key in stale:
            del self._attempts[key]
        if stale:
            logger.info("Login throttle dropped %d idle clients, tracking %d",
                        len(stale), len(self._attempts))
