"""
Cancellation signal passed explicitly into blocking calls.
"""

import threading
from typing import Callable, List


class CancellationToken:
    """
    Thread-safe, one-shot cancellation flag.

    Blocking code registers a callback with add_callback() so it can wake up
    as soon as cancel() is called instead of waiting out its timeout.

    Example:
        >>> token = CancellationToken()
        >>> threading.Timer(2.0, token.cancel).start()
        >>> limiter.acquire(cancel_token=token)  # raises if still blocked after 2s
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Set the flag and run registered callbacks once."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks = list(self._callbacks)
            self._callbacks.clear()
        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Register a callback; runs immediately if already cancelled."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)
