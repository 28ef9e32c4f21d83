"""Queued logging to named viewers, with level and text filters."""

from __future__ import annotations

import queue
import threading
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from types import TracebackType
from typing import Any

from .monitor import Monitor
from .profiler import Profiler
from .properties import Properties

LOG_SERVICE_SECTION = "LogService"
LOG_LEVEL_PROPERTY = "LogLevel"
MAX_LINE_LEN = 1024
MAX_QUEUED_LINES = 5000

_STOP = object()


class LogLevel(IntEnum):
    """Verbosity of a message; higher levels are more detailed."""

    LEVEL_0 = 0
    LEVEL_1 = 1
    LEVEL_2 = 2
    LEVEL_3 = 3


_LEVEL_NAMES = {f"LOG_LEVEL_{level.value}": level for level in LogLevel}


class Viewer(ABC):
    """A destination for log lines, identified by name."""

    def __init__(self, name: str = "") -> None:
        self.name = name

    @abstractmethod
    def view(self, date: int, line: str) -> None:
        """Show ``line``, logged at ``date`` (seconds since the epoch)."""


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    text = fmt % args if args else fmt
    return text[: MAX_LINE_LEN - 1]


class Log:
    """Formats messages, queues them and hands them to viewers.

    Bypass viewers see every line; the other viewers only see lines that
    pass the positive and negative text filters.
    """

    def __init__(self, level: LogLevel = LogLevel.LEVEL_0) -> None:
        self._monitor = Monitor()
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=MAX_QUEUED_LINES)
        self._thread: threading.Thread | None = None
        self._viewers: list[Viewer] = []
        self._bypass_viewers: list[Viewer] = []
        self._positive_filters: list[str] = []
        self._negative_filters: list[str] = []
        self.level = level

    # -- output thread -------------------------------------------------

    def start(self) -> None:
        """Start delivering queued lines on a background thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._thread = threading.Thread(target=self._run, name="log", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Deliver the lines queued so far and stop the background thread."""
        thread = self._thread
        if thread is None:
            return
        self._queue.put(_STOP)
        thread.join()
        self._thread = None

    def _run(self) -> None:
        while True:
            line = self._queue.get()
            if line is _STOP:
                return
            self._dispatch(line)

    def output_one(self, timeout: float | None = None) -> bool:
        """Deliver one queued line; False if none arrived within ``timeout``."""
        try:
            line = self._queue.get(timeout=timeout) if timeout else self._queue.get_nowait() \
                if timeout is not None else self._queue.get()
        except queue.Empty:
            return False
        if line is _STOP:
            self._queue.put(_STOP)
            return False
        return self._dispatch(line)

    def _dispatch(self, line: str) -> bool:
        if not line:
            return False
        with self._monitor:
            date = int(time.time())
            for viewer in self._bypass_viewers:
                viewer.view(date, line)
            if self._viewers and self.is_passable(line):
                for viewer in self._viewers:
                    viewer.view(date, line)
        return True

    # -- viewers -------------------------------------------------------

    def viewer_count(self) -> int:
        """Number of attached viewers of both kinds."""
        return len(self._viewers) + len(self._bypass_viewers)

    def _all_viewers(self) -> list[Viewer]:
        return self._viewers + self._bypass_viewers

    def get_viewer(self, name: str) -> Viewer | None:
        """The first attached viewer called ``name``, or None."""
        if not name:
            return None
        with self._monitor:
            return next((v for v in self._all_viewers() if v.name == name), None)

    def add_viewer(self, viewer: Viewer, bypass: bool = True) -> bool:
        """Attach ``viewer``; False if it is already in that list."""
        if viewer is None:
            raise ValueError("viewer must not be None")
        with self._monitor:
            target = self._bypass_viewers if bypass else self._viewers
            if any(item is viewer for item in target):
                return False
            target.append(viewer)
            return True

    def delete_viewer(self, viewer: Viewer | str) -> bool:
        """Detach a viewer given by object or name; False if none matched."""
        if viewer is None or viewer == "":
            raise ValueError("viewer must not be empty")
        if isinstance(viewer, str):
            def matches(item: Viewer) -> bool:
                return item.name == viewer
        else:
            def matches(item: Viewer) -> bool:
                return item is viewer
        with self._monitor:
            before = self.viewer_count()
            self._viewers = [item for item in self._viewers if not matches(item)]
            self._bypass_viewers = [
                item for item in self._bypass_viewers if not matches(item)
            ]
            return self.viewer_count() != before

    def is_connected(self, viewer: Viewer | str) -> bool:
        """Whether a viewer given by object or name is attached."""
        if viewer is None or viewer == "":
            raise ValueError("viewer must not be empty")
        with self._monitor:
            if isinstance(viewer, str):
                return any(item.name == viewer for item in self._all_viewers())
            return any(item is viewer for item in self._all_viewers())

    # -- filters -------------------------------------------------------

    def add_positive_filter(self, text: str) -> bool:
        """Require lines to contain one of the positive filters."""
        return self._add_filter(self._positive_filters, text)

    def add_negative_filter(self, text: str) -> bool:
        """Reject lines that contain ``text``."""
        return self._add_filter(self._negative_filters, text)

    def _add_filter(self, filters: list[str], text: str) -> bool:
        if text is None:
            raise ValueError("filter must not be None")
        with self._monitor:
            if text in filters:
                return False
            filters.append(text)
            return True

    def delete_filter(self, text: str | None = None) -> None:
        """Remove ``text`` from both filter lists, or every filter if None."""
        with self._monitor:
            if text is None:
                self._positive_filters.clear()
                self._negative_filters.clear()
            else:
                self._positive_filters = [f for f in self._positive_filters if f != text]
                self._negative_filters = [f for f in self._negative_filters if f != text]

    def dump_filters(self) -> None:
        """Log the current filters."""
        self.log(LogLevel.LEVEL_0, "Positive Filter(s) : ")
        for text in list(self._positive_filters):
            self.log(LogLevel.LEVEL_0, "'%s' ", text)
        self.log_ln(LogLevel.LEVEL_0, "")
        self.log(LogLevel.LEVEL_0, "Negative Filter(s) : ")
        for text in list(self._negative_filters):
            self.log(LogLevel.LEVEL_0, "'%s' ", text)
        self.log_ln(LogLevel.LEVEL_0, "")

    def is_passable(self, line: str) -> bool:
        """Whether ``line`` passes the positive and negative filters."""
        if self._positive_filters and not any(f in line for f in self._positive_filters):
            return False
        return not any(f in line for f in self._negative_filters)

    # -- logging -------------------------------------------------------

    def _accepts(self, level: LogLevel) -> bool:
        return level <= self.level and self.viewer_count() > 0

    def log(self, level: LogLevel, fmt: str, *args: Any) -> None:
        """Queue a printf-style message without a line ending."""
        if not self._accepts(level):
            return
        self._queue.put(_format(fmt, args))

    def log_ln(self, level: LogLevel, fmt: str, *args: Any) -> None:
        """Queue a printf-style message ending in CR LF."""
        if not self._accepts(level):
            return
        text = _format(fmt, args)
        if len(text) < MAX_LINE_LEN - 2:
            text += "\r\n"
        else:
            text = text[: MAX_LINE_LEN - 3] + "\r\n"
        self._queue.put(text)

    def dump_mem(self, data: bytes) -> None:
        """Log ``data`` as hexadecimal, if it is at most a line long."""
        if len(data) > MAX_LINE_LEN:
            return
        self.log_ln(LogLevel.LEVEL_0, "%s", bytes(data).hex())

    def set_properties(self, properties: Properties) -> None:
        """Take the log level from the ``LogService`` section."""
        if properties is None:
            raise ValueError("properties must not be None")
        name = properties.get_string(LOG_SERVICE_SECTION, LOG_LEVEL_PROPERTY)
        level = _LEVEL_NAMES.get(name)
        if level is not None:
            self.level = level

    def clear(self) -> None:
        """Detach every viewer and remove every filter."""
        with self._monitor:
            self._viewers.clear()
            self._bypass_viewers.clear()
            self._positive_filters.clear()
            self._negative_filters.clear()


class FunctionLog:
    """Logs entry to and exit from a block, with its duration if profiled."""

    def __init__(
        self,
        log: Log,
        level: LogLevel,
        profiler: Profiler | None,
        fmt: str,
        *args: Any,
    ) -> None:
        self._log = log
        self._level = level
        self._profiler = profiler
        self._text = _format(fmt, args)

    def __enter__(self) -> FunctionLog:
        self._log.log_ln(self._level, "Enter %s", self._text)
        if self._profiler is not None:
            self._profiler.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._profiler is not None:
            self._profiler.stop()
            self._log.log_ln(
                self._level, "Elapsed Time: %d ms", self._profiler.duration()
            )
        self._log.log_ln(self._level, "Leave %s", self._text)