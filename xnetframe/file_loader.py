"""Loader that reads and writes properties in INI-style files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .properties import Loader, PropertiesError

_BLANKS = " \t"


class IniFormatError(PropertiesError):
    """A line of a property file could not be understood."""

    def __init__(self, message: str, path: str, line: int) -> None:
        super().__init__(f"{path}:{line}: {message}")
        self.path = path
        self.line = line


def _header_name(line: str) -> Optional[str]:
    body = line.split("\r", 1)[0].lstrip(_BLANKS)
    if not body.startswith("["):
        return None
    end = body.find("]")
    return body[1:end] if end > 0 else None


def _line_key(line: str) -> Optional[str]:
    body = line.split("\r", 1)[0].lstrip(_BLANKS)
    if not body or body.startswith("#"):
        return None
    key, sep, _ = body.split("#", 1)[0].partition("=")
    return key.rstrip(_BLANKS) if sep else None


class FileLoader(Loader):
    """Reads ``key = value`` lines grouped under ``[section]`` headers.

    Lines starting with ``#`` are comments, text after ``#`` is ignored,
    and ``include <path>`` reads another file in place.
    """

    def __init__(self, name: str = "FL", path: str | os.PathLike[str] | None = None) -> None:
        super().__init__(name)
        self._path = ""
        self._sections: set[str] = set()
        if path is not None:
            self.set_file(path)

    @property
    def path(self) -> str:
        return self._path

    def set_file(self, path: str | os.PathLike[str]) -> None:
        """Choose the file to read and write."""
        if path is None:
            raise ValueError("path must not be None")
        self._path = os.fspath(path)

    def sections(self) -> list[str]:
        """Names of the sections seen by the last load, sorted."""
        return sorted(self._sections)

    def load_properties(self) -> None:
        """Read the file into the attached properties."""
        if not self._path:
            raise PropertiesError("no file set")
        if self.properties is None:
            raise PropertiesError("loader is not attached to properties")
        self._sections.clear()
        self._load_file(self._path, frozenset({os.path.abspath(self._path)}))

    def _load_file(self, path: str, active: frozenset[str]) -> None:
        properties = self.properties
        assert properties is not None
        with open(path, encoding="utf-8", newline="") as handle:
            text = handle.read()

        section = ""
        for number, raw in enumerate(text.split("\n"), 1):
            line = raw.split("\r", 1)[0]
            body = line.lstrip(_BLANKS)
            if not body or body.startswith("#"):
                continue

            if body.startswith("["):
                end = body.find("]")
                if end < 0:
                    raise IniFormatError("section lost ']'", path, number)
                section = body[1:end]
                if not section:
                    raise IniFormatError("section is empty", path, number)
                continue

            body = body.split("#", 1)[0]
            key, sep, rest = body.partition("=")
            if sep:
                key = key.rstrip(_BLANKS)
                if not key:
                    raise IniFormatError("key is empty", path, number)
                value = rest.strip(_BLANKS)
                if not value:
                    raise IniFormatError("no value", path, number)
                self._sections.add(section)
                properties.add_property(self.name, section, key, value)
                continue

            at = body.find("include")
            if at >= 0:
                target = body[at + len("include"):].strip(_BLANKS)
                if not target:
                    raise IniFormatError("invalid line", path, number)
                resolved = os.path.abspath(target)
                if resolved in active:
                    raise IniFormatError(f"recursive include of {target}", path, number)
                self._load_file(target, active | {resolved})
                continue

            raise IniFormatError("invalid line", path, number)

    def set_property(self, section: str, key: str, value: str) -> None:
        """Write ``key=value`` into ``section`` of the file."""
        if not self._path:
            raise PropertiesError("no file set")
        if not section or not key or not value:
            raise ValueError("section, key and value must not be empty")
        self._write(section, key, str(value))

    def reset_property(self, section: str, key: str) -> None:
        """Remove ``key`` from ``section`` of the file."""
        if not self._path:
            raise PropertiesError("no file set")
        if not section or not key:
            raise ValueError("section and key must not be empty")
        self._write(section, key, None)

    def _write(self, section: str, key: str, value: Optional[str]) -> None:
        path = Path(self._path)
        lines = path.read_text(encoding="utf-8").split("\n") if path.exists() else []
        if lines and lines[-1] == "":
            lines.pop()

        start = next(
            (index for index, line in enumerate(lines) if _header_name(line) == section),
            None,
        )
        entry = f"{key}={value}"
        if start is None:
            if value is None:
                return
            lines.extend([f"[{section}]", entry])
        else:
            end = next(
                (
                    index
                    for index, line in enumerate(lines[start + 1:], start + 1)
                    if _header_name(line) is not None
                ),
                len(lines),
            )
            found = next(
                (
                    index
                    for index in range(start + 1, end)
                    if _line_key(lines[index]) == key
                ),
                None,
            )
            if value is None:
                if found is None:
                    return
                del lines[found]
            elif found is not None:
                lines[found] = entry
            else:
                filled = [
                    index
                    for index in range(start + 1, end)
                    if lines[index].strip(_BLANKS + "\r")
                ]
                lines.insert(filled[-1] + 1 if filled else start + 1, entry)

        path.write_text("\n".join(lines) + "\n", encoding="utf-8")