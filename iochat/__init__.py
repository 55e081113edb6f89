"""A TCP broadcast chat server, console chat client and socket helpers."""

__version__ = "0.1.0"
__all__ = ["client", "netutil", "server", "session", "sockets"]