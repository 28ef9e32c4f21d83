"""Counters, deadlines and elapsed-time measurement."""

from __future__ import annotations

import time
from typing import Callable


class Profiler:
    """Counts events and measures time in milliseconds.

    ``clock`` returns the current time in seconds; it defaults to
    :func:`time.perf_counter`.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.perf_counter
        self.count = 0
        self._opened_ms = 0
        self._closed_ms = 0
        self._deadline_ms = 0
        self._activated_ms = 0
        self._deactivated_ms = 0
        self._accumulated_ms = 0
        self._begin = 0.0
        self._elapsed = 0.0

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def inc_count(self) -> None:
        """Add one to the event counter."""
        self.count += 1

    def reset_count(self) -> None:
        """Set the event counter back to zero."""
        self.count = 0

    def set_elapsed_time(self, milliseconds: int) -> None:
        """Arm a deadline ``milliseconds`` from now."""
        self._opened_ms = self._now_ms()
        self._deadline_ms = self._opened_ms + milliseconds

    def is_elapsed(self) -> bool:
        """Whether the armed deadline has passed."""
        self._closed_ms = self._now_ms()
        return self._closed_ms > self._deadline_ms

    def check_time(self, active: bool) -> None:
        """Mark the start (``True``) or end (``False``) of a measured interval."""
        if active:
            self._activated_ms = self._now_ms()
        else:
            self._deactivated_ms = self._now_ms()
            self._accumulated_ms += self._deactivated_ms - self._activated_ms

    def time_interval(self) -> int:
        """Length of the last marked interval in milliseconds."""
        return self._deactivated_ms - self._activated_ms

    @property
    def accumulated_time(self) -> int:
        """Sum of all marked intervals in milliseconds."""
        return self._accumulated_ms

    def reset_accumulated_time(self) -> None:
        """Forget the accumulated interval time."""
        self._accumulated_ms = 0

    def start(self) -> None:
        """Begin a high-resolution measurement."""
        self._begin = self._clock()
        self._elapsed = 0.0

    def stop(self) -> None:
        """Add the time since :meth:`start` to the measurement."""
        self._elapsed += self._clock() - self._begin

    def duration(self) -> int:
        """Measured time in whole milliseconds."""
        return int(self._elapsed * 1000)