import pytest

from xnetframe.properties import DEFAULT_SECTION, Loader, Properties, PropertiesError


class RecordingLoader(Loader):
    def __init__(self, name="rec", fail=False):
        super().__init__(name)
        self.calls = []
        self.fail = fail
        self.loaded = 0

    def load_properties(self):
        self.loaded += 1
        if self.properties is not None:
            self.properties.add_property(self.name, "S", "loaded", "yes")

    def set_property(self, section, key, value):
        if self.fail:
            raise PropertiesError("refused")
        self.calls.append(("set", section, key, value))

    def reset_property(self, section, key):
        if self.fail:
            raise PropertiesError("refused")
        self.calls.append(("reset", section, key))


def test_string_property_round_trip():
    props = Properties()
    props.add_property("L", "Server", "Host", "localhost")
    assert props.get_string("Server", "Host") == "localhost"
    assert len(props) == 1


def test_int_property_is_stored_as_text():
    props = Properties()
    props.add_property("L", "Server", "Port", 8080)
    assert props.get_int("Server", "Port") == 8080
    assert props.get_string("Server", "Port") == "8080"


def test_float_property_uses_fixed_notation():
    props = Properties()
    props.add_property("L", "S", "ratio", 1.5)
    assert props.get_string("S", "ratio") == "1.500000"
    assert props.get_float("S", "ratio") == 1.5


def test_missing_property_defaults():
    props = Properties()
    assert props.get_string("S", "none") == ""
    assert props.get_int("S", "none") == 0
    assert props.get_float("S", "none") == 0.0


@pytest.mark.parametrize(
    "text, expected",
    [("12abc", 12), ("  -7", -7), ("abc", 0), ("+3", 3)],
)
def test_get_int_reads_leading_integer(text, expected):
    props = Properties()
    props.add_property("L", "S", "n", text)
    assert props.get_int("S", "n") == expected


def test_get_float_reads_leading_number():
    props = Properties()
    props.add_property("L", "S", "f", "2.5units")
    assert props.get_float("S", "f") == 2.5


def test_later_value_replaces_earlier():
    props = Properties()
    props.add_property("L", "S", "k", "first")
    props.add_property("L", "S", "k", "second")
    assert props.get_string("S", "k") == "second"
    assert len(props) == 1


def test_sections_keep_names_apart():
    props = Properties()
    props.add_property("L", "A", "k", "a")
    props.add_property("L", "B", "k", "b")
    assert props.get_string("A", "k") == "a"
    assert props.get_string("B", "k") == "b"
    assert len(props) == 2


def test_default_section_name():
    props = Properties()
    props.add_property("L", DEFAULT_SECTION, "k", "v")
    assert DEFAULT_SECTION == "Default"
    assert props.get_string("Default", "k") == "v"


def test_has_and_delete_property():
    props = Properties()
    props.add_property("L", "S", "k", "v")
    assert props.has_property("S", "k") is True
    props.delete_property("S", "k")
    assert props.has_property("S", "k") is False
    assert len(props) == 0


def test_add_property_rejects_none():
    props = Properties()
    with pytest.raises(TypeError):
        props.add_property("L", "S", "k", None)


def test_loader_registration():
    props = Properties()
    loader = RecordingLoader()
    assert props.add_loader(loader) is True
    assert props.add_loader(loader) is False
    assert loader.properties is props
    assert props.loader_count() == 1
    assert props.get_loader("rec") is loader
    assert props.get_loader("") is None
    assert props.is_connected(loader) is True
    assert props.is_connected("rec") is True
    assert props.is_connected("other") is False


def test_delete_loader_by_name():
    props = Properties()
    loader = RecordingLoader()
    props.add_loader(loader)
    assert props.delete_loader("rec") is True
    assert loader.properties is None
    assert props.delete_loader("rec") is False
    assert props.loader_count() == 0


def test_delete_loader_by_object():
    props = Properties()
    first, second = RecordingLoader("a"), RecordingLoader("b")
    props.add_loader(first)
    props.add_loader(second)
    assert props.delete_loader(first) is True
    assert props.is_connected(first) is False
    assert props.get_loader("b") is second


def test_add_property_ex_needs_known_loader():
    props = Properties()
    with pytest.raises(PropertiesError):
        props.add_property_ex("missing", "S", "k", "v")
    assert props.has_property("S", "k") is False


def test_add_property_ex_persists_through_loader():
    props = Properties()
    loader = RecordingLoader()
    props.add_loader(loader)
    props.add_property_ex("rec", "S", "k", 7)
    assert loader.calls == [("set", "S", "k", "7")]
    assert props.get_int("S", "k") == 7


def test_add_property_ex_failure_stores_nothing():
    props = Properties()
    props.add_loader(RecordingLoader(fail=True))
    with pytest.raises(PropertiesError):
        props.add_property_ex("rec", "S", "k", "v")
    assert props.has_property("S", "k") is False


def test_delete_property_ex():
    props = Properties()
    loader = RecordingLoader()
    props.add_loader(loader)
    props.add_property("rec", "S", "k", "v")
    props.delete_property_ex("rec", "S", "k")
    assert loader.calls == [("reset", "S", "k")]
    assert props.has_property("S", "k") is False


def test_load_properties_runs_every_loader():
    props = Properties()
    first, second = RecordingLoader("a"), RecordingLoader("b")
    props.add_loader(first)
    props.add_loader(second)
    props.load_properties()
    assert (first.loaded, second.loaded) == (1, 1)
    assert props.get_string("S", "loaded") == "yes"


def test_clear_detaches_everything():
    props = Properties()
    loader = RecordingLoader()
    props.add_loader(loader)
    props.add_property("rec", "S", "k", "v")
    props.clear()
    assert len(props) == 0
    assert props.loader_count() == 0
    assert loader.properties is None