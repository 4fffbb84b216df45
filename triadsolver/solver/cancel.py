"""Cooperative cancellation for long-running solves."""

from __future__ import annotations

import threading
import time

from ..exceptions import CancellationError

# Stop event shared with the parent, installed in each worker process by the pool initializer
_worker_stop = None


class CancelToken:
    """Cancellation flag shared between a caller and a running solve.

    The search polls ``check()`` only after a child position has been fully
    evaluated. ``deadline`` is a ``time.time()`` timestamp so that it keeps its
    meaning when shipped to worker processes. ``event`` may be any object with
    ``set``/``is_set``; worker processes pass a ``multiprocessing`` event so
    that the parent can stop them.
    """

    def __init__(self, deadline: float | None = None, event=None) -> None:
        self._event = event if event is not None else threading.Event()
        self.deadline = deadline

    @classmethod
    def with_timeout(cls, timeout_ms: float) -> CancelToken:
        return cls(deadline=time.time() + timeout_ms / 1000.0)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self.deadline is not None and time.time() >= self.deadline

    def check(self) -> None:
        """Raise CancellationError if cancellation was requested or the deadline passed."""
        if self.cancelled:
            raise CancellationError()

    def __repr__(self) -> str:
        return f"CancelToken(cancelled={self.cancelled}, deadline={self.deadline})"


def install_worker_stop(event) -> None:
    """Pool initializer: remember the parent's stop event in this worker."""
    global _worker_stop
    _worker_stop = event


def worker_token(deadline: float | None) -> CancelToken | None:
    """Token for code running in a worker process, or None outside a cancellable pool."""
    if _worker_stop is None and deadline is None:
        return None
    return CancelToken(deadline=deadline, event=_worker_stop)


__all__ = ["CancelToken", "install_worker_stop", "worker_token"]
