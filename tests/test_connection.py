import socket

import pytest

from xpserver.connection import Connection, reverse_message
from xpserver.loop import EventLoop


@pytest.mark.parametrize(
    "data,expected",
    [
        (b"hello\n", b"olleh\n"),
        (b"abc\n", b"cba\n"),
        (b"ab", b"ab"),
        (b"", b""),
        (b"\n", b"\n"),
    ],
)
def test_reverse_message(data, expected):
    assert reverse_message(data) == expected


def test_reverse_message_stops_at_nul():
    assert reverse_message(b"abcd\n\0xyz") == b"dcba\n\0xyz"


def test_reverse_is_involution():
    data = b"some longer line of text\n"
    assert reverse_message(reverse_message(data)) == data
    assert len(reverse_message(data)) == len(data)


@pytest.fixture
def tcp_pair():
    server = socket.socket()
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    client = socket.create_connection(server.getsockname())
    client.settimeout(5)
    conn, _ = server.accept()
    server.close()
    yield client, conn
    client.close()
    conn.close()


def test_connection_echoes_reversed(tcp_pair, capsys):
    client, conn_sock = tcp_pair
    with EventLoop() as loop:
        conn = Connection(loop, conn_sock)
        assert conn.remote_ip == "127.0.0.1"
        client.sendall(b"hello\n")
        assert loop.run_once(2.0) == 1
        assert client.recv(100) == b"olleh\n"
    assert "[CLIENT MESSAGE] hello\n" in capsys.readouterr().out


def test_peer_close_destroys(tcp_pair):
    client, conn_sock = tcp_pair
    with EventLoop() as loop:
        conn = Connection(loop, conn_sock)
        client.close()
        assert loop.run_once(2.0) == 1
        assert conn.closed is True
        assert conn_sock.fileno() == -1
        assert loop.run_once(0) == 0


def test_destroy_is_idempotent(tcp_pair):
    _, conn_sock = tcp_pair
    with EventLoop() as loop:
        conn = Connection(loop, conn_sock)
        conn.destroy()
        conn.destroy()
        assert conn.closed is True
        assert conn_sock.fileno() == -1


def test_remote_ip_none_for_non_inet_socket():
    a, b = socket.socketpair()
    try:
        with EventLoop() as loop:
            conn = Connection(loop, a)
            assert conn.remote_ip is None
            conn.destroy()
    finally:
        b.close()