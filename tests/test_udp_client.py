import io
import socket
import threading

import pytest

from xpserver.phase0.udp_client import main, run_client


def _udp():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5)
    return sock


def _start_server(reply):
    server = _udp()
    received = []

    def run():
        with server:
            data, addr = server.recvfrom(100)
            received.append(data)
            server.sendto(reply, addr)

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return server.getsockname(), received, thread


def test_run_client_sends_line_without_newline():
    address, received, thread = _start_server(b"cba")
    with _udp() as client:
        out = io.StringIO()
        run_client(client, address, io.StringIO("abc\n"), out)
    thread.join(5)
    assert received == [b"abc"]
    assert out.getvalue() == (
        "Enter a string: [SERVER MESSAGE] cba\nEnter a string: "
    )


def test_run_client_drops_last_character_without_newline():
    address, received, thread = _start_server(b"ok")
    with _udp() as client:
        out = io.StringIO()
        run_client(client, address, io.StringIO("abc"), out)
    thread.join(5)
    assert received == [b"ab"]
    assert out.getvalue() == (
        "Enter a string: [SERVER MESSAGE] ok\nEnter a string: "
    )


def test_run_client_empty_input_only_prompts():
    with _udp() as client:
        out = io.StringIO()
        run_client(client, ("127.0.0.1", 9), io.StringIO(""), out)
    assert out.getvalue() == "Enter a string: "


def test_main_rejects_bad_port_argument():
    with pytest.raises(SystemExit):
        main(["--port", "x"])