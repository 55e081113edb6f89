"""One connected chat client on the server side."""

from __future__ import annotations

import asyncio
import enum

MAX_RECEIVE_LENGTH = 1024


class OperationType(enum.Enum):
    """Kind of I/O operation performed on a connection."""

    ACCEPT = enum.auto()
    RECV = enum.auto()
    SEND = enum.auto()
    NONE = enum.auto()


class ClientSession:
    """A client connection with its peer address."""

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        address: str,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.address = address
        self._closed = False

    async def receive(self) -> bytes:
        """Read up to ``MAX_RECEIVE_LENGTH`` bytes; empty bytes mean disconnect."""
        return await self.reader.read(MAX_RECEIVE_LENGTH)

    async def send(self, data: bytes) -> None:
        """Write ``data`` to the client and wait until it is flushed."""
        self.writer.write(data)
        await self.writer.drain()

    async def disconnect(self) -> None:
        """Close the connection; further calls do nothing."""
        if self._closed:
            return
        self._closed = True
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except (ConnectionError, OSError):
            pass