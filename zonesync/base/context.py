"""
Cancellation signal passed through one reconciliation pass.

A :class:`Context` is handed to every zone fetch, every remote call and
the worker pool's task loop.  Cancelling it (explicitly, or by reaching
its deadline) stops workers from pulling new tasks; calls already in
flight finish under their own transport timeout.
"""

from __future__ import annotations

import threading
import time


class Context:
    """Thread-safe cancellation flag with an optional deadline."""

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    def cancelled(self) -> bool:
        """Return True once :meth:`cancel` was called or the deadline passed."""
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False

    def remaining(self) -> float | None:
        """Seconds until the deadline, ``None`` without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def wait(self, seconds: float) -> bool:
        """Sleep up to *seconds*, waking early on cancellation.

        Returns:
            True if the context was cancelled while waiting.
        """
        remaining = self.remaining()
        if remaining is not None:
            seconds = min(seconds, remaining)
        self._event.wait(seconds)
        return self.cancelled()


def background() -> Context:
    """Return a fresh context that is never cancelled unless asked to."""
    return Context()
