"""A re-entrant lock that guards shared state between threads."""

from __future__ import annotations

import threading
from types import TracebackType


class Monitor:
    """A re-entrant critical section usable as a context manager."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def enter(self) -> None:
        """Block until the monitor is owned by the calling thread."""
        self._lock.acquire()

    def leave(self) -> None:
        """Release one level of ownership held by the calling thread."""
        self._lock.release()

    def __enter__(self) -> Monitor:
        self.enter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.leave()