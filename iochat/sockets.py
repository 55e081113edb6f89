"""A thin owning wrapper around an IPv4 socket."""

from __future__ import annotations

import enum
import socket
from types import TracebackType
from typing import Optional, Union

ANY_ADDRESS = "0.0.0.0"


class ProtocolType(enum.Enum):
    """Transport protocol of a :class:`Socket`."""

    TCP = enum.auto()
    UDP = enum.auto()


def make_sockaddr(ip: Optional[str], port: int) -> tuple[str, int]:
    """Build an IPv4 address tuple; ``None`` means any local address.

    Raises ``ValueError`` for a malformed dotted-quad address or a port
    outside 0..65535.
    """
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"Invalid port: {port}")
    if ip is None:
        return (ANY_ADDRESS, port)
    try:
        socket.inet_pton(socket.AF_INET, ip)
    except (OSError, ValueError) as exc:
        raise ValueError(f"Invalid IP format: {ip}") from exc
    return (ip, port)


class Socket:
    """An IPv4 TCP or UDP socket that closes itself when done with."""

    def __init__(self, protocol: ProtocolType = ProtocolType.TCP) -> None:
        if protocol is ProtocolType.TCP:
            kind, proto = socket.SOCK_STREAM, socket.IPPROTO_TCP
        else:
            kind, proto = socket.SOCK_DGRAM, socket.IPPROTO_UDP
        self.protocol = protocol
        self._sock = socket.socket(socket.AF_INET, kind, proto)

    def fileno(self) -> int:
        """Return the descriptor, or -1 once the socket is closed."""
        return self._sock.fileno()

    def bind(self, port: int) -> None:
        """Bind to ``port`` on every local address; closes the socket on failure."""
        address = make_sockaddr(None, port)
        try:
            self._sock.bind(address)
        except OSError:
            self.close()
            raise

    def listen(self, backlog: int) -> None:
        """Start accepting connections, queueing at most ``backlog`` of them."""
        self._sock.listen(backlog)

    def connect(self, ip: str, port: int) -> None:
        """Connect to ``ip:port``."""
        self._sock.connect(make_sockaddr(ip, port))

    def send(self, data: Union[bytes, str]) -> None:
        """Send all of ``data``; text is encoded as UTF-8."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._sock.sendall(data)

    def recv(self, bufsize: int) -> bytes:
        """Receive up to ``bufsize`` bytes; empty bytes mean the peer closed."""
        return self._sock.recv(bufsize)

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        self._sock.close()

    def __enter__(self) -> "Socket":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()