"""Interactive chat client: sends typed lines and prints what the server relays."""

from __future__ import annotations

import argparse
import codecs
import socket
import sys
import threading
from typing import Iterable, Optional, Sequence, TextIO

from iochat.sockets import make_sockaddr

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5555
RECEIVE_SIZE = 1023
EXIT_COMMANDS = frozenset({"exit", "quit"})
CLOSED_MESSAGE = "Server closed the connection."


def format_message(name: str, line: str) -> str:
    """Prefix ``line`` with the sender's name."""
    return f"{name}: {line}"


def is_exit_command(line: str) -> bool:
    """Whether ``line`` asks the client to leave."""
    return line in EXIT_COMMANDS


class _Output:
    """Line-oriented writer shared by the input and receiver threads."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def line(self, text: str) -> None:
        with self._lock:
            self._stream.write(text + "\n")
            self._stream.flush()


def _receive_loop(sock: socket.socket, out: _Output) -> None:
    decoder = codecs.getincrementaldecoder("utf-8")("replace")
    while True:
        try:
            chunk = sock.recv(RECEIVE_SIZE)
        except OSError as exc:
            print(f"recv failed: {exc}", file=sys.stderr)
            return
        if not chunk:
            out.line(CLOSED_MESSAGE)
            return
        out.line(decoder.decode(chunk))


def run(
    name: str,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    stdin: Optional[Iterable[str]] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Chat as ``name`` with the server at ``host:port``; return an exit status."""
    lines = sys.stdin if stdin is None else stdin
    out = _Output(sys.stdout if stdout is None else stdout)

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect(make_sockaddr(host, port))
    except (OSError, ValueError):
        sock.close()
        print("Unable to connect to server", file=sys.stderr)
        return 1

    with sock:
        out.line(f"Connected to server: {host}:{port}")
        receiver = threading.Thread(target=_receive_loop, args=(sock, out), daemon=True)
        receiver.start()

        for raw in lines:
            line = raw.rstrip("\r\n")
            if is_exit_command(line):
                break
            try:
                sock.sendall(format_message(name, line).encode("utf-8"))
            except OSError as exc:
                print(f"send failed: {exc}", file=sys.stderr)
                break

        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        receiver.join()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Ask for a name if none is given, then start chatting."""
    parser = argparse.ArgumentParser(description="Connect to the chat server.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="server address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="server port")
    parser.add_argument("--name", help="name shown before your messages")
    args = parser.parse_args(argv)

    name = args.name
    if name is None:
        sys.stdout.write("Enter your Name: ")
        sys.stdout.flush()
        words = sys.stdin.readline().split()
        if not words:
            print("No name given", file=sys.stderr)
            return 1
        name = words[0]
    return run(name, args.host, args.port)


if __name__ == "__main__":
    sys.exit(main())