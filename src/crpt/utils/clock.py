"""
Time sources for the rate limiter.

MonotonicClock wraps time.monotonic() for production use. ManualClock only
moves when told to, which keeps window tests deterministic.
"""

import threading
import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def monotonic(self) -> float:
        """Return a non-decreasing time reading in seconds."""
        ...


class MonotonicClock:
    """Clock backed by time.monotonic()."""

    def monotonic(self) -> float:
        return time.monotonic()


class ManualClock:
    """
    Controllable clock for tests.

    Example:
        >>> clock = ManualClock()
        >>> clock.advance(0.5)
        >>> clock.monotonic()
        0.5
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)
        self._lock = threading.Lock()

    def monotonic(self) -> float:
        with self._lock:
            return self._now

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("ManualClock cannot move backwards")
        with self._lock:
            self._now += seconds
