"""
Cancellation and deadline tokens passed to every request-issuing call.

A Context is either cancelled explicitly (``cancel()``), expires when its
deadline passes, or is cancelled together with its parent. The library
never imposes a timeout on its own: a request made with
``Context.background()`` waits as long as the transport does.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, List, Optional

CANCELED = "context canceled"
DEADLINE_EXCEEDED = "context deadline exceeded"


class Context:
    def __init__(self, deadline: Optional[float] = None, parent: Optional["Context"] = None):
        # deadline is a time.monotonic() value
        if parent is not None and parent.deadline is not None:
            if deadline is None or parent.deadline < deadline:
                deadline = parent.deadline
        self.deadline = deadline
        self._lock = threading.Lock()
        self._err: Optional[str] = None
        self._callbacks: List[Callable[[], None]] = []
        self._parent_unsubscribe: Optional[Callable[[], None]] = None
        if parent is not None:
            self._parent_unsubscribe = parent.on_cancel(self.cancel)

    @classmethod
    def background(cls) -> "Context":
        """Context that is never cancelled and has no deadline."""
        return cls()

    def with_cancel(self) -> "Context":
        return Context(parent=self)

    def with_timeout(self, seconds: float) -> "Context":
        return Context(deadline=time.monotonic() + seconds, parent=self)

    def cancel(self) -> None:
        self._finish(CANCELED)

    def remaining(self) -> Optional[float]:
        """Seconds until the deadline, or None when there is no deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def err(self) -> Optional[str]:
        """Why the context is done, or None while it is still live."""
        if self._err is None and self.deadline is not None and time.monotonic() >= self.deadline:
            self._finish(DEADLINE_EXCEEDED)
        return self._err

    @property
    def done(self) -> bool:
        return self.err() is not None

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run on cancellation; returns an unsubscribe function.

        An expired deadline only fires callbacks once ``err()`` notices it,
        so waiters bound their wait with ``remaining()``. A callback registered on an already cancelled context runs
        immediately.
        """
        with self._lock:
            if self._err is None:
                self._callbacks.append(callback)
                registered = True
            else:
                registered = False
        if not registered:
            callback()
            return lambda: None

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    def _finish(self, reason: str) -> None:
        with self._lock:
            if self._err is not None:
                return
            self._err = reason
            callbacks, self._callbacks = self._callbacks, []
        if self._parent_unsubscribe is not None:
            self._parent_unsubscribe()
        for callback in callbacks:
            callback()
