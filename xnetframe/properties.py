"""Named property store fed by pluggable loaders."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Union

from .monitor import Monitor

DEFAULT_SECTION = "Default"

PropertyValue = Union[str, int, float]

_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"[ \t\n\v\f\r]*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class PropertiesError(Exception):
    """A property or loader operation could not be carried out."""


class Loader(ABC):
    """A source of properties that can be attached to a :class:`Properties`."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.properties: Properties | None = None

    @abstractmethod
    def load_properties(self) -> None:
        """Read every property from the source into ``self.properties``."""

    @abstractmethod
    def set_property(self, section: str, key: str, value: str) -> None:
        """Persist ``value`` for ``key`` in ``section``."""

    @abstractmethod
    def reset_property(self, section: str, key: str) -> None:
        """Remove ``key`` from ``section`` in the source."""


def _format_value(value: PropertyValue) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:f}"
    if isinstance(value, str):
        return value
    raise TypeError(f"unsupported property value: {value!r}")


def _to_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _to_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


class Properties:
    """String-valued properties addressed by section and name."""

    def __init__(self) -> None:
        self._monitor = Monitor()
        self._loaders: list[Loader] = []
        self._values: dict[str, str] = {}
        self._origins: dict[str, str] = {}

    @staticmethod
    def _key(section: str, name: str) -> str:
        return f"{section}|{name}"

    def _find(self, loader: Loader | str) -> Loader | None:
        if isinstance(loader, str):
            if not loader:
                return None
            return next((item for item in self._loaders if item.name == loader), None)
        return next((item for item in self._loaders if item is loader), None)

    def add_loader(self, loader: Loader) -> bool:
        """Attach ``loader``; False if it is already attached."""
        if loader is None:
            raise ValueError("loader must not be None")
        with self._monitor:
            if self._find(loader) is not None:
                return False
            loader.properties = self
            self._loaders.append(loader)
            return True

    def get_loader(self, name: str) -> Loader | None:
        """The first attached loader called ``name``, or None."""
        with self._monitor:
            return self._find(name) if name else None

    def delete_loader(self, loader: Loader | str) -> bool:
        """Detach a loader given by object or name; False if not attached."""
        with self._monitor:
            target = self._find(loader)
            if target is None:
                return False
            target.properties = None
            self._loaders = [item for item in self._loaders if item is not target]
            return True

    def is_connected(self, loader: Loader | str) -> bool:
        """Whether a loader given by object or name is attached."""
        with self._monitor:
            return self._find(loader) is not None

    def loader_count(self) -> int:
        """Number of attached loaders."""
        return len(self._loaders)

    def add_property(
        self, loader_name: str, section: str, name: str, value: PropertyValue
    ) -> None:
        """Store ``value`` in memory, noting which loader supplied it."""
        text = _format_value(value)
        key = self._key(section, name)
        self._values[key] = text
        self._origins[key] = loader_name

    def add_property_ex(
        self, loader_name: str, section: str, name: str, value: PropertyValue
    ) -> None:
        """Persist ``value`` through the named loader, then store it."""
        text = _format_value(value)
        loader = self.get_loader(loader_name)
        if loader is None:
            raise PropertiesError(f"no loader named {loader_name!r}")
        loader.set_property(section, name, text)
        key = self._key(section, name)
        self._values[key] = text
        self._origins[key] = loader_name

    def get_string(self, section: str, name: str) -> str:
        """The stored text, or an empty string."""
        return self._values.get(self._key(section, name), "")

    def get_int(self, section: str, name: str) -> int:
        """The leading integer of the stored text, or 0."""
        return _to_int(self.get_string(section, name))

    def get_float(self, section: str, name: str) -> float:
        """The leading number of the stored text, or 0.0."""
        return _to_float(self.get_string(section, name))

    def has_property(self, section: str, name: str) -> bool:
        """Whether a value is stored for ``section`` and ``name``."""
        return self._key(section, name) in self._values

    def delete_property(self, section: str, name: str) -> None:
        """Forget the stored value, if any."""
        key = self._key(section, name)
        self._values.pop(key, None)
        self._origins.pop(key, None)

    def delete_property_ex(self, loader_name: str, section: str, name: str) -> None:
        """Remove the value through the named loader, then forget it."""
        loader = self.get_loader(loader_name)
        if loader is None:
            raise PropertiesError(f"no loader named {loader_name!r}")
        loader.reset_property(section, name)
        self.delete_property(section, name)

    def load_properties(self) -> None:
        """Ask every attached loader to load its properties."""
        with self._monitor:
            for loader in list(self._loaders):
                loader.load_properties()

    def clear(self) -> None:
        """Detach every loader and forget every property."""
        with self._monitor:
            for loader in self._loaders:
                loader.properties = None
            self._loaders.clear()
            self._values.clear()
            self._origins.clear()

    def __len__(self) -> int:
        return len(self._values)