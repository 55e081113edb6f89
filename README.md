# iochat

A small TCP chat system: a server that relays every chunk of data it
receives to all connected clients, and a console client that sends lines of
text prefixed with your name and prints everything the server relays.

## Installation

```
pip install .
```

## Running the server

```
iochat-server [--host HOST] [--port PORT]
```

By default the server listens on port 5555 on all interfaces (`0.0.0.0`).
It prints `Server is running.` once it is listening, announces each client
that connects with its `host:port` address, and drops a client from the
broadcast list when it disconnects. Everything a client sends is relayed to
every connected client, the sender included. Type `q` and press Enter on the
server's console, or end its input, to stop it; stopping disconnects every
client.

## Running the client

```
iochat-client [--host HOST] [--port PORT] [--name NAME]
```

The client connects to `127.0.0.1:5555` unless told otherwise. Without
`--name` it asks for your name and uses the first word you type. It then
reads lines from the console and sends each one as `name: line`. Whatever
the server relays is printed as it arrives. Type `exit` or `quit`, or end
input, to leave. If the server closes the connection the client prints
`Server closed the connection.`

Messages are sent as raw bytes with no delimiter, so the client prints each
chunk it receives on its own line; messages sent in quick succession may
arrive joined together.

## Using it from Python

- `iochat.server.ChatServer(port, host)` — an asyncio server with
  `await start()`, `await stop()`, `add_session(session)` and
  `await broadcast(data)` (which returns how many sends succeeded), plus the
  `is_running` and `sessions` properties. Passing port `0` picks a free port;
  after `start()` the chosen one is in `port`.
- `iochat.session.ClientSession(reader, writer, address)` — one connected
  client, with `await receive()`, `await send(data)` and
  `await disconnect()`; `OperationType` names the kinds of I/O operation.
- `iochat.client` — `format_message(name, line)` builds an outgoing message,
  `is_exit_command(line)` recognises the quit words, and
  `run(name, host, port, stdin, stdout)` runs a chat session over the given
  streams and returns an exit status.
- `iochat.sockets` — `Socket`, an IPv4 TCP or UDP socket usable as a context
  manager, `ProtocolType`, and `make_sockaddr(ip, port)`, which validates an
  address and raises `ValueError` for a bad IP or port.
- `iochat.netutil` — `addr_to_string(family, address)` and
  `peer_addr_string(sock)` render addresses as `host:port`.

## Tests

```
pip install .[test]
pytest
```