"""IPv4 socket addresses with name resolution."""

from __future__ import annotations

import socket


class UnknownHostError(LookupError):
    """A host name could not be resolved."""


class InetAddress:
    """An IPv4 address and port, optionally resolved from a host name."""

    def __init__(self, host: str | None = None, port: int = 0) -> None:
        self._host_name = ""
        self._packed = bytes(4)
        self._port = 0
        self._valid = False
        self.port = port
        if host is not None:
            self.set_by_name(host)

    @property
    def port(self) -> int:
        return self._port

    @port.setter
    def port(self, value: int) -> None:
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"port out of range: {value}")
        self._port = value

    @property
    def host_name(self) -> str:
        return self._host_name

    def set_by_name(self, host: str) -> None:
        """Set the address from a dotted IPv4 string or a resolvable name."""
        try:
            self._packed = socket.inet_aton(host)
            self._host_name = host
        except OSError:
            try:
                name, _aliases, addresses = socket.gethostbyname_ex(host)
            except OSError as error:
                self._valid = False
                raise UnknownHostError(f"cannot resolve host {host!r}") from error
            if not addresses:
                self._valid = False
                raise UnknownHostError(f"no address for host {host!r}")
            self._host_name = name
            self._packed = socket.inet_aton(addresses[0])
        self._valid = True

    def set_socket_address(self, address: tuple[str, int]) -> None:
        """Take address and port from a ``(host, port)`` socket address."""
        host, port = address[0], address[1]
        self._packed = socket.inet_aton(host)
        self.port = port
        self._valid = True

    def host_address(self) -> str:
        """The address in dotted-quad form."""
        return socket.inet_ntoa(self._packed)

    def is_valid(self) -> bool:
        """Whether an address has been set and the port is non-zero."""
        return self._valid and self._port != 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InetAddress):
            return NotImplemented
        return self._packed == other._packed and self._port == other._port

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"{self.host_address()}:{self._port}"

    def __repr__(self) -> str:
        return f"InetAddress({self.host_address()!r}, {self._port})"