"""Chat server that relays every message it receives to all connected clients."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from iochat.netutil import peer_addr_string
from iochat.session import ClientSession

DEFAULT_PORT = 5555
DEFAULT_HOST = "0.0.0.0"


class ChatServer:
    """Accepts TCP clients and broadcasts each received chunk to every client."""

    def __init__(self, port: int = DEFAULT_PORT, host: str = DEFAULT_HOST) -> None:
        self.host = host
        self.port = port
        self._server: Optional[asyncio.base_events.Server] = None
        self._sessions: dict[ClientSession, None] = {}
        self._tasks: set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        """Whether the server is currently accepting clients."""
        return self._server is not None

    @property
    def sessions(self) -> tuple[ClientSession, ...]:
        """The sessions currently connected, in the order they joined."""
        return tuple(self._sessions)

    async def start(self) -> None:
        """Bind, listen and begin accepting clients.

        Raises ``RuntimeError`` if the server is already running and
        ``OSError`` if the address cannot be bound.
        """
        if self._server is not None:
            raise RuntimeError("server is already running")
        self._server = await asyncio.start_server(
            self._handle_client, self.host, self.port
        )
        self.port = self._server.sockets[0].getsockname()[1]
        print("Server is running.", flush=True)

    async def stop(self) -> None:
        """Stop accepting, disconnect every client and wait for them to finish."""
        server = self._server
        if server is None:
            return
        self._server = None
        server.close()
        for session in list(self._sessions):
            await session.disconnect()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        await server.wait_closed()

    def add_session(self, session: ClientSession) -> None:
        """Register ``session`` so that it receives broadcasts."""
        self._sessions[session] = None

    async def broadcast(self, data: bytes) -> int:
        """Send ``data`` to every session; return how many sends succeeded."""
        peers = list(self._sessions)
        results = await asyncio.gather(
            *(peer.send(data) for peer in peers), return_exceptions=True
        )
        delivered = 0
        for peer, result in zip(peers, results):
            if isinstance(result, Exception):
                print(f"Send failed for {peer.address}: {result}", file=sys.stderr)
            else:
                delivered += 1
        return delivered

    async def _handle_client(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        task = asyncio.current_task()
        if task is not None:
            self._tasks.add(task)
        sock = writer.get_extra_info("socket")
        address = peer_addr_string(sock) if sock is not None else "<unknown>"
        print(f"New client: {address}", flush=True)
        session = ClientSession(reader, writer, address)
        self.add_session(session)
        try:
            while True:
                data = await session.receive()
                if not data:
                    break
                await self.broadcast(data)
        except (ConnectionError, OSError):
            pass
        finally:
            self._sessions.pop(session, None)
            if task is not None:
                self._tasks.discard(task)
            print(f"session Disconnect !! : {address}", flush=True)
            await session.disconnect()


async def _serve(host: str, port: int) -> int:
    server = ChatServer(port, host)
    await server.start()
    loop = asyncio.get_running_loop()
    try:
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line or "q" in line.split():
                break
    finally:
        await server.stop()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the chat server until ``q`` is entered on standard input."""
    parser = argparse.ArgumentParser(description="Run the chat server.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)
    try:
        return asyncio.run(_serve(args.host, args.port))
    except OSError as exc:
        print(f"Unable to start server: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())