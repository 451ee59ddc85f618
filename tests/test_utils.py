import socket

import pytest

from xpserver.utils import (
    get_remote_ip,
    is_valid_port,
    make_socket_non_blocking,
    resolve_address,
)


@pytest.mark.parametrize("port", [0, 80, 8001, 65535])
def test_valid_ports(port):
    assert is_valid_port(port) is True


@pytest.mark.parametrize("port", [-1, 65536, 100000])
def test_invalid_ports(port):
    assert is_valid_port(port) is False


def test_resolve_numeric_address():
    assert resolve_address("127.0.0.1", 8001) == ("127.0.0.1", 8001)


def test_resolve_rejects_bad_port():
    with pytest.raises(ValueError):
        resolve_address("127.0.0.1", 70000)


def test_resolve_rejects_missing_host():
    with pytest.raises(ValueError):
        resolve_address(None, 80)


def test_make_non_blocking():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        make_socket_non_blocking(sock)
        assert sock.getblocking() is False


def test_make_non_blocking_on_closed_socket():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.close()
    with pytest.raises(OSError):
        make_socket_non_blocking(sock)


def test_get_remote_ip_of_connected_socket():
    with socket.socket() as server:
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        with socket.create_connection(server.getsockname()) as client:
            conn, _ = server.accept()
            with conn:
                assert get_remote_ip(conn) == "127.0.0.1"
                assert get_remote_ip(client) == "127.0.0.1"


def test_get_remote_ip_unconnected_raises():
    with socket.socket() as sock:
        with pytest.raises(OSError):
            get_remote_ip(sock)