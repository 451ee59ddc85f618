import io
import socket

import pytest

from xpserver.phase0.tcp_client import chat, main


def _pair():
    a, b = socket.socketpair()
    a.settimeout(5)
    b.settimeout(5)
    return a, b


def test_chat_prints_reply_and_stops_at_end_of_input():
    client, peer = _pair()
    with client, peer:
        peer.sendall(b"olleh\n")
        out = io.StringIO()
        with pytest.raises(EOFError):
            chat(client, io.StringIO("hello\n"), out)
        assert peer.recv(100) == b"hello\n"
        assert out.getvalue() == "[SERVER MESSAGE] olleh\n"


def test_chat_raises_when_server_closes():
    client, peer = _pair()
    with client:
        peer.close()
        out = io.StringIO()
        with pytest.raises(ConnectionError):
            chat(client, io.StringIO("hello\n"), out)
        assert out.getvalue() == ""


def test_chat_empty_input_sends_nothing():
    client, peer = _pair()
    with client, peer:
        with pytest.raises(EOFError):
            chat(client, io.StringIO(""), io.StringIO())
        peer.setblocking(False)
        with pytest.raises(BlockingIOError):
            peer.recv(100)


def test_main_reports_failed_connection(capsys):
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    assert main(["--port", str(port)]) == 1
    assert "[ERROR] Failed to connect to tcp server" in capsys.readouterr().out