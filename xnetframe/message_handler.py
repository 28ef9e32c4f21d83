"""Message headers, handlers and a registry of handlers by message id."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, ClassVar

_HEADER = struct.Struct("<II")


@dataclass(frozen=True)
class MessageHeader:
    """Fixed header in front of every message: total length and message id."""

    length: int
    message_id: int

    SIZE: ClassVar[int] = _HEADER.size

    def pack(self) -> bytes:
        """The header as wire bytes."""
        return _HEADER.pack(self.length, self.message_id)

    @classmethod
    def unpack(cls, data: bytes) -> MessageHeader:
        """Read a header from the start of ``data``."""
        if len(data) < cls.SIZE:
            raise ValueError(
                f"message header needs {cls.SIZE} bytes, got {len(data)}"
            )
        length, message_id = _HEADER.unpack_from(data)
        return cls(length, message_id)


class MessageHandler(ABC):
    """Handles one kind of message, identified by its message id."""

    def __init__(self, message_id: int) -> None:
        self.message_id = message_id

    @abstractmethod
    def handle_message(self, target: Any, message: bytes, context: Any) -> int:
        """Process ``message`` on behalf of ``target``; return a result code."""


class MessageHandlerFactory:
    """Registry mapping message ids to their handlers."""

    def __init__(self) -> None:
        self._handlers: dict[int, MessageHandler] = {}

    def get(self, message_id: int) -> MessageHandler | None:
        """The handler for ``message_id``, or None."""
        return self._handlers.get(message_id)

    def add(self, handler: MessageHandler) -> bool:
        """Register ``handler``; False if its id is already taken."""
        if not isinstance(handler, MessageHandler):
            raise TypeError("handler must be a MessageHandler")
        if handler.message_id in self._handlers:
            return False
        self._handlers[handler.message_id] = handler
        return True

    def delete(self, message_id: int) -> bool:
        """Remove the handler for ``message_id``; False if there was none."""
        return self._handlers.pop(message_id, None) is not None

    def clear(self) -> None:
        """Remove every handler."""
        self._handlers.clear()

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._handlers

    def __iter__(self) -> Iterator[MessageHandler]:
        return iter(list(self._handlers.values()))