"""Incremental MD5 message digest."""

from __future__ import annotations

import math
import struct

_MASK = 0xFFFFFFFF
_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)
_T = tuple(int(abs(math.sin(i + 1)) * 2**32) & _MASK for i in range(64))
_S = (
    (7, 12, 17, 22) * 4
    + (5, 9, 14, 20) * 4
    + (4, 11, 16, 23) * 4
    + (6, 10, 15, 21) * 4
)


def _rotate_left(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _compress(state: tuple[int, int, int, int], block: bytes) -> tuple[int, int, int, int]:
    x = struct.unpack("<16I", block)
    a, b, c, d = state
    for i in range(64):
        if i < 16:
            f = (b & c) | (~b & d)
            g = i
        elif i < 32:
            f = (b & d) | (c & ~d)
            g = (5 * i + 1) % 16
        elif i < 48:
            f = b ^ c ^ d
            g = (3 * i + 5) % 16
        else:
            f = c ^ (b | ~d)
            g = (7 * i) % 16
        t = (a + (f & _MASK) + x[g] + _T[i]) & _MASK
        a, d, c, b = d, c, b, (b + _rotate_left(t, _S[i])) & _MASK
    return (
        (state[0] + a) & _MASK,
        (state[1] + b) & _MASK,
        (state[2] + c) & _MASK,
        (state[3] + d) & _MASK,
    )


class MessageDigest:
    """MD5 digest fed incrementally with :meth:`update`."""

    def __init__(self, data: bytes = b"") -> None:
        self.reset()
        self.update(data)

    def reset(self) -> None:
        """Return to the state of an empty message."""
        self._state = _INITIAL_STATE
        self._length = 0
        self._buffer = b""

    def update(self, data: bytes) -> None:
        """Feed more bytes into the digest."""
        chunk = bytes(memoryview(data))
        if not chunk:
            return
        self._length += len(chunk)
        pending = self._buffer + chunk
        full = len(pending) - len(pending) % 64
        for offset in range(0, full, 64):
            self._state = _compress(self._state, pending[offset:offset + 64])
        self._buffer = pending[full:]

    def digest(self) -> bytes:
        """The 16-byte digest of everything fed so far."""
        bit_length = (self._length * 8) & 0xFFFFFFFFFFFFFFFF
        padding = b"\x80" + b"\x00" * ((55 - self._length) % 64)
        tail = self._buffer + padding + struct.pack("<Q", bit_length)
        state = self._state
        for offset in range(0, len(tail), 64):
            state = _compress(state, tail[offset:offset + 64])
        return struct.pack("<4I", *state)


def md5(data: bytes) -> bytes:
    """The MD5 digest of ``data``."""
    return MessageDigest(data).digest()