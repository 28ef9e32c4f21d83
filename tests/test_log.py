import pytest

from xnetframe.log import FunctionLog, Log, LogLevel, Viewer
from xnetframe.profiler import Profiler
from xnetframe.properties import Properties


class Recorder(Viewer):
    def __init__(self, name="rec"):
        super().__init__(name)
        self.lines = []
        self.dates = []

    def view(self, date, line):
        self.dates.append(date)
        self.lines.append(line)


def drain(log):
    while log.output_one(0):
        pass


def test_no_viewers_queues_nothing():
    log = Log()
    log.log_ln(LogLevel.LEVEL_0, "hello")
    assert log.output_one(0) is False


def test_log_ln_formats_and_delivers():
    log = Log()
    viewer = Recorder()
    assert log.add_viewer(viewer) is True
    log.log_ln(LogLevel.LEVEL_0, "hello %d", 5)
    assert log.output_one(0) is True
    assert viewer.lines == ["hello 5\r\n"]
    assert isinstance(viewer.dates[0], int) and viewer.dates[0] > 0


def test_level_filtering():
    log = Log()
    viewer = Recorder()
    log.add_viewer(viewer)
    log.log(LogLevel.LEVEL_1, "detail")
    drain(log)
    assert viewer.lines == []
    log.level = LogLevel.LEVEL_2
    log.log(LogLevel.LEVEL_1, "detail")
    drain(log)
    assert viewer.lines == ["detail"]


def test_bypass_and_filtered_viewers():
    log = Log()
    bypass = Recorder("bypass")
    filtered = Recorder("filtered")
    log.add_viewer(bypass, True)
    log.add_viewer(filtered, False)
    log.add_positive_filter("abc")
    log.add_negative_filter("bad")
    log.log(LogLevel.LEVEL_0, "abc ok")
    log.log(LogLevel.LEVEL_0, "other")
    log.log(LogLevel.LEVEL_0, "abc bad")
    drain(log)
    assert bypass.lines == ["abc ok", "other", "abc bad"]
    assert filtered.lines == ["abc ok"]


def test_is_passable_and_delete_filter():
    log = Log()
    log.add_positive_filter("x")
    assert log.add_positive_filter("x") is False
    assert log.is_passable("y") is False
    log.delete_filter("x")
    assert log.is_passable("y") is True
    log.add_negative_filter("y")
    assert log.is_passable("y") is False
    log.delete_filter(None)
    assert log.is_passable("y") is True


def test_viewer_management():
    log = Log()
    first = Recorder("one")
    second = Recorder("two")
    assert log.add_viewer(first) is True
    assert log.add_viewer(first) is False
    log.add_viewer(second, False)
    assert log.viewer_count() == 2
    assert log.get_viewer("two") is second
    assert log.get_viewer("missing") is None
    assert log.is_connected("one") is True
    assert log.is_connected(second) is True
    assert log.delete_viewer("one") is True
    assert log.delete_viewer(second) is True
    assert log.delete_viewer("one") is False
    assert log.viewer_count() == 0


def test_add_none_viewer_raises():
    with pytest.raises(ValueError):
        Log().add_viewer(None)


def test_long_lines_are_truncated():
    log = Log()
    viewer = Recorder()
    log.add_viewer(viewer)
    log.log_ln(LogLevel.LEVEL_0, "%s", "x" * 2000)
    log.log(LogLevel.LEVEL_0, "%s", "y" * 2000)
    drain(log)
    assert len(viewer.lines[0]) == 1023
    assert viewer.lines[0].endswith("\r\n")
    assert viewer.lines[1] == "y" * 1023


def test_dump_mem():
    log = Log()
    viewer = Recorder()
    log.add_viewer(viewer)
    log.dump_mem(b"\x01\xab")
    log.dump_mem(bytes(1025))
    drain(log)
    assert viewer.lines == ["01ab\r\n"]


def test_dump_filters():
    log = Log()
    viewer = Recorder()
    log.add_viewer(viewer)
    log.add_positive_filter("a")
    log.add_negative_filter("b")
    log.dump_filters()
    drain(log)
    assert viewer.lines == [
        "Positive Filter(s) : ",
        "'a' ",
        "\r\n",
        "Negative Filter(s) : ",
        "'b' ",
        "\r\n",
    ]


def test_set_properties():
    log = Log()
    props = Properties()
    props.add_property("FL", "LogService", "LogLevel", "LOG_LEVEL_2")
    log.set_properties(props)
    assert log.level == LogLevel.LEVEL_2
    props.add_property("FL", "LogService", "LogLevel", "unknown")
    log.set_properties(props)
    assert log.level == LogLevel.LEVEL_2
    with pytest.raises(ValueError):
        log.set_properties(None)


def test_thread_delivers_before_stop():
    log = Log()
    viewer = Recorder()
    log.add_viewer(viewer)
    log.start()
    for number in range(3):
        log.log_ln(LogLevel.LEVEL_0, "line %d", number)
    log.stop()
    assert viewer.lines == ["line 0\r\n", "line 1\r\n", "line 2\r\n"]


def test_clear():
    log = Log()
    log.add_viewer(Recorder())
    log.add_positive_filter("z")
    log.clear()
    assert log.viewer_count() == 0
    assert log.is_passable("anything") is True


def test_function_log_with_profiler():
    times = iter([1.0, 1.25])
    profiler = Profiler(clock=lambda: next(times))
    log = Log()
    viewer = Recorder()
    log.add_viewer(viewer)
    with FunctionLog(log, LogLevel.LEVEL_0, profiler, "work %s", "f"):
        pass
    drain(log)
    assert viewer.lines == [
        "Enter work f\r\n",
        "Elapsed Time: 250 ms\r\n",
        "Leave work f\r\n",
    ]


def test_function_log_without_profiler():
    log = Log()
    viewer = Recorder()
    log.add_viewer(viewer)
    with FunctionLog(log, LogLevel.LEVEL_0, None, "g"):
        pass
    drain(log)
    assert viewer.lines == ["Enter g\r\n", "Leave g\r\n"]