"""Helpers for turning socket addresses into printable strings."""

from __future__ import annotations

import socket
from typing import Any, Optional


def addr_to_string(family: int, address: Optional[tuple[Any, ...]]) -> str:
    """Render an address as ``host:port`` for IPv4 and IPv6 families.

    ``address`` is a tuple in the form returned by ``getpeername``.
    Unknown families give ``"<unknown>"``.
    """
    if address is None:
        return "add_storage is null"
    if family in (socket.AF_INET, socket.AF_INET6):
        host, port = address[0], address[1]
        return f"{host}:{port}"
    return "<unknown>"


def peer_addr_string(sock: socket.socket) -> str:
    """Describe the remote end of a connected socket as ``host:port``.

    If the peer cannot be determined, a ``<peername error: N>`` marker is
    returned instead, where ``N`` is the error number.
    """
    try:
        address = sock.getpeername()
    except OSError as exc:
        return f"<peername error: {exc.errno}>"
    return addr_to_string(sock.family, address)