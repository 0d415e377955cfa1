"""
Rate limiting functionality for API request control.

This module provides a thread-safe sliding-window rate limiter that allows at
most `limit` admissions in any trailing interval of length `window`.
"""

import datetime as dt
import logging
import math
import numbers
import threading
from collections import deque
from typing import Deque, Optional, Union

from crpt.exceptions import AcquireCancelledError, InvalidArgumentError
from crpt.utils.cancellation import CancellationToken
from crpt.utils.clock import Clock, MonotonicClock

# Never wait less than one millisecond, clock jitter would otherwise spin
MIN_WAIT_SECONDS = 0.001


class SlidingWindowLimiter:
    """
    Thread-safe sliding-window rate limiter.

    Admission timestamps are kept oldest-first in a deque and trimmed lazily.
    Blocked callers wait on a condition tied to the limiter lock until the
    oldest timestamp leaves the window. Waiters are not served in FIFO order:
    whichever re-takes the lock first gets a freed slot.

    Example:
        >>> limiter = SlidingWindowLimiter(window=1.0, limit=10)  # 10 requests per second
        >>> limiter.acquire()  # Blocks if necessary to maintain rate limit
        >>> make_api_request()
    """

    def __init__(
        self,
        window: Union[float, dt.timedelta],
        limit: int,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize rate limiter.

        :param window: Window length in seconds (or a timedelta), must be > 0
        :param limit: Maximum admissions per window, must be > 0
        :param clock: Time source (default: MonotonicClock)
        :param logger: Optional logger for wait diagnostics
        """
        if isinstance(window, dt.timedelta):
            window = window.total_seconds()
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise InvalidArgumentError(f"limit must be an int, got {limit!r}")
        if limit <= 0:
            raise InvalidArgumentError(f"limit must be > 0, got {limit}")
        if isinstance(window, bool) or not isinstance(window, numbers.Real):
            raise InvalidArgumentError(f"window must be a number of seconds, got {window!r}")
        if not math.isfinite(window) or not window > 0:
            raise InvalidArgumentError(f"window must be > 0, got {window}")

        self._window = float(window)
        self._limit = limit
        self._clock = clock or MonotonicClock()
        self.logger = logger or logging.getLogger(__name__)

        self._stamps: Deque[float] = deque()
        self._lock = threading.Lock()
        self._cond = threading.Condition(self._lock)
        self._waiting = 0

    @property
    def window(self) -> float:
        return self._window

    @property
    def limit(self) -> int:
        return self._limit

    def acquire(self, cancel_token: Optional[CancellationToken] = None) -> None:
        """
        Reserve one admission slot, blocking until one is free.

        :param cancel_token: Optional token; cancelling it aborts the wait
        :raises AcquireCancelledError: If cancelled before admission (nothing is recorded)
        """
        if cancel_token is not None:
            if cancel_token.cancelled:
                raise AcquireCancelledError()
            cancel_token.add_callback(self._wake_waiters)

        try:
            with self._cond:
                waited = False
                while True:
                    if cancel_token is not None and cancel_token.cancelled:
                        raise AcquireCancelledError()

                    now = self._clock.monotonic()
                    self._trim(now)
                    if len(self._stamps) < self._limit:
                        self._stamps.append(now)
                        if waited:
                            self._cond.notify_all()
                        return

                    wait = self._stamps[0] + self._window - now
                    if wait <= 0:
                        # Oldest entry is due: re-trim and re-test, never admit blindly
                        continue

                    if not waited:
                        self.logger.debug(
                            f"Rate limit reached ({self._limit} per {self._window}s), "
                            f"waiting {wait:.3f}s"
                        )
                    waited = True
                    self._waiting += 1
                    try:
                        self._cond.wait(max(wait, MIN_WAIT_SECONDS))
                    finally:
                        self._waiting -= 1
        finally:
            if cancel_token is not None:
                cancel_token.remove_callback(self._wake_waiters)

    def try_acquire(self) -> bool:
        """
        Non-blocking variant of acquire().

        :return: True if a slot was reserved, False if the window is full
        """
        with self._cond:
            now = self._clock.monotonic()
            self._trim(now)
            if len(self._stamps) >= self._limit:
                return False
            self._stamps.append(now)
            return True

    @property
    def waiting(self) -> int:
        """Number of callers currently blocked in acquire()."""
        with self._cond:
            return self._waiting

    def available(self) -> int:
        """Number of slots free at the current instant."""
        with self._cond:
            self._trim(self._clock.monotonic())
            return self._limit - len(self._stamps)

    def _trim(self, now: float) -> None:
        # Same comparison as the wait computation in acquire()
        while self._stamps and self._stamps[0] + self._window <= now:
            self._stamps.popleft()

    def _wake_waiters(self) -> None:
        with self._cond:
            self._cond.notify_all()
