import asyncio
import io
import socket

import pytest

from iochat.server import ChatServer, main


async def _wait_for_sessions(server, count, timeout=5.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while len(server.sessions) != count and loop.time() < deadline:
        await asyncio.sleep(0.01)
    return len(server.sessions)


class _RecordingPeer:
    def __init__(self, address="peer"):
        self.address = address
        self.received = []

    async def send(self, data):
        self.received.append(data)


class _BrokenPeer:
    address = "broken"

    async def send(self, data):
        raise ConnectionResetError("gone")


@pytest.mark.asyncio
async def test_message_is_relayed_to_all_clients_including_sender():
    server = ChatServer(port=0, host="127.0.0.1")
    await server.start()
    try:
        r1, w1 = await asyncio.open_connection("127.0.0.1", server.port)
        r2, w2 = await asyncio.open_connection("127.0.0.1", server.port)
        assert await _wait_for_sessions(server, 2) == 2

        w1.write(b"hi")
        await w1.drain()

        got1 = await asyncio.wait_for(r1.read(1024), 5)
        got2 = await asyncio.wait_for(r2.read(1024), 5)
        assert got1 == b"hi"
        assert got2 == b"hi"

        w1.close()
        w2.close()
    finally:
        await server.stop()


@pytest.mark.asyncio
async def test_disconnected_client_is_removed():
    server = ChatServer(port=0, host="127.0.0.1")
    await server.start()
    try:
        _, w1 = await asyncio.open_connection("127.0.0.1", server.port)
        _, w2 = await asyncio.open_connection("127.0.0.1", server.port)
        assert await _wait_for_sessions(server, 2) == 2

        w1.close()
        assert await _wait_for_sessions(server, 1) == 1
        w2.close()
        assert await _wait_for_sessions(server, 0) == 0
    finally:
        await server.stop()


@pytest.mark.asyncio
async def test_session_address_is_host_and_port_of_client():
    server = ChatServer(port=0, host="127.0.0.1")
    await server.start()
    try:
        _, writer = await asyncio.open_connection("127.0.0.1", server.port)
        assert await _wait_for_sessions(server, 1) == 1
        local = writer.get_extra_info("sockname")
        assert server.sessions[0].address == f"{local[0]}:{local[1]}"
        writer.close()
    finally:
        await server.stop()


@pytest.mark.asyncio
async def test_start_twice_raises():
    server = ChatServer(port=0, host="127.0.0.1")
    await server.start()
    try:
        with pytest.raises(RuntimeError):
            await server.start()
    finally:
        await server.stop()


@pytest.mark.asyncio
async def test_stop_is_idempotent_and_clears_running_state():
    server = ChatServer(port=0, host="127.0.0.1")
    await server.start()
    assert server.is_running
    await server.stop()
    await server.stop()
    assert server.is_running is False


@pytest.mark.asyncio
async def test_stop_disconnects_clients():
    server = ChatServer(port=0, host="127.0.0.1")
    await server.start()
    reader, writer = await asyncio.open_connection("127.0.0.1", server.port)
    assert await _wait_for_sessions(server, 1) == 1
    await server.stop()
    data = await asyncio.wait_for(reader.read(1024), 5)
    assert data == b""
    assert server.sessions == ()
    writer.close()


@pytest.mark.asyncio
async def test_broadcast_reaches_registered_sessions():
    server = ChatServer(port=0, host="127.0.0.1")
    first, second = _RecordingPeer("a"), _RecordingPeer("b")
    server.add_session(first)
    server.add_session(second)
    delivered = await server.broadcast(b"abc")
    assert delivered == 2
    assert first.received == [b"abc"]
    assert second.received == [b"abc"]


@pytest.mark.asyncio
async def test_broadcast_continues_past_failing_peer():
    server = ChatServer(port=0, host="127.0.0.1")
    good = _RecordingPeer()
    server.add_session(_BrokenPeer())
    server.add_session(good)
    delivered = await server.broadcast(b"x")
    assert delivered == 1
    assert good.received == [b"x"]


def test_main_stops_on_q(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))
    assert main(["--host", "127.0.0.1", "--port", "0"]) == 0
    assert "Server is running." in capsys.readouterr().out


def test_main_fails_when_port_is_taken(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        port = busy.getsockname()[1]
        assert main(["--host", "127.0.0.1", "--port", str(port)]) == 1