import socket

import pytest

from iochat.netutil import addr_to_string, peer_addr_string


def test_ipv4_address_rendered_as_host_colon_port():
    assert addr_to_string(socket.AF_INET, ("127.0.0.1", 5555)) == "127.0.0.1:5555"


def test_ipv6_address_keeps_only_host_and_port():
    assert addr_to_string(socket.AF_INET6, ("::1", 8080, 0, 0)) == "::1:8080"


def test_missing_address_reports_null():
    assert addr_to_string(socket.AF_INET, None) == "add_storage is null"


def test_unknown_family():
    assert addr_to_string(socket.AF_UNSPEC, ("x", 1)) == "<unknown>"


@pytest.fixture
def listener():
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.bind(("127.0.0.1", 0))
    srv.listen(1)
    yield srv
    srv.close()


def test_peer_addr_string_of_connected_socket(listener):
    port = listener.getsockname()[1]
    client = socket.create_connection(("127.0.0.1", port))
    conn, _ = listener.accept()
    try:
        assert peer_addr_string(client) == f"127.0.0.1:{port}"
        client_port = client.getsockname()[1]
        assert peer_addr_string(conn) == f"127.0.0.1:{client_port}"
    finally:
        conn.close()
        client.close()


def test_peer_addr_string_of_unconnected_socket():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        text = peer_addr_string(sock)
    finally:
        sock.close()
    assert text.startswith("<peername error: ")
    assert text.endswith(">")