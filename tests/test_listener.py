import socket

import pytest

from xpserver.listener import Listener
from xpserver.loop import EventLoop


@pytest.fixture
def loop():
    lp = EventLoop()
    yield lp
    lp.close()


def test_accept_and_echo(loop):
    listener = Listener(loop, "127.0.0.1", 0)
    try:
        with socket.create_connection(listener.sock.getsockname(), timeout=5) as client:
            assert loop.run_once(2.0) == 1
            assert len(listener.connections) == 1
            conn = listener.connections[0]
            assert conn.listener is listener
            assert conn.remote_ip == "127.0.0.1"
            client.sendall(b"hello\n")
            assert loop.run_once(2.0) == 1
            assert client.recv(100) == b"olleh\n"
    finally:
        listener.destroy()


def test_connection_removed_when_peer_closes(loop):
    listener = Listener(loop, "127.0.0.1", 0)
    try:
        client = socket.create_connection(listener.sock.getsockname(), timeout=5)
        loop.run_once(2.0)
        assert len(listener.connections) == 1
        client.close()
        loop.run_once(2.0)
        assert listener.connections == []
    finally:
        listener.destroy()


def test_invalid_port(loop):
    with pytest.raises(ValueError):
        Listener(loop, "127.0.0.1", 70000)


def test_port_in_use(loop):
    first = Listener(loop, "127.0.0.1", 0)
    try:
        port = first.sock.getsockname()[1]
        with pytest.raises(OSError):
            Listener(loop, "127.0.0.1", port)
    finally:
        first.destroy()


def test_destroy_closes_socket(loop):
    listener = Listener(loop, "127.0.0.1", 0)
    address = listener.sock.getsockname()
    listener.destroy()
    assert listener.sock.fileno() == -1
    with pytest.raises(ConnectionRefusedError):
        socket.create_connection(address, timeout=2)


def test_handler_without_pending_client_returns_none(loop):
    listener = Listener(loop, "127.0.0.1", 0)
    try:
        assert listener.connection_handler() is None
        assert listener.connections == []
    finally:
        listener.destroy()