"""Reversing TCP echo server driven by a readiness loop."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Sequence

from xpserver.connection import reverse_message
from xpserver.loop import EventLoop

PORT = 8080
BUFF_SIZE = 100000
MAX_ACCEPT_BACKLOG = 5


def reverse_line(data: bytes) -> bytes:
    """Reverse a message up to its final character, which stays last."""
    return reverse_message(data)


def _print(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _handle_client(loop: EventLoop, conn: socket.socket) -> None:
    try:
        data = conn.recv(BUFF_SIZE)
    except OSError:
        data = None
    if not data:
        if data is None:
            _print("[INFO] Error occured. Closing connection\n")
        else:
            _print("[INFO] Client disconnected.\n")
        loop.detach(conn)
        conn.close()
        return
    _print("[CLIENT MESSAGE] " + data.split(b"\0", 1)[0].decode("utf-8", errors="replace"))
    try:
        conn.sendall(reverse_line(data))
    except OSError:
        loop.detach(conn)
        conn.close()


def serve(sock: socket.socket) -> None:
    """Accept clients on a listening socket and answer each message reversed, forever."""
    with EventLoop() as loop:

        def accept() -> None:
            conn, _ = sock.accept()
            conn.setblocking(True)
            _print("[INFO] Client connected to the server.\n")
            loop.attach(conn, lambda: _handle_client(loop, conn))

        loop.attach(sock, accept)
        while True:
            _print("[DEBUG] Epoll wait\n")
            loop.run_once(None)


def _create_server(host: str, port: int) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
        sock.listen(MAX_ACCEPT_BACKLOG)
    except OSError:
        sock.close()
        raise
    return sock


def main(argv: Sequence[str] | None = None) -> int:
    """Run the reversing TCP server."""
    parser = argparse.ArgumentParser(prog="tcp-server", description="Reversing TCP server.")
    parser.add_argument("--host", default="", help="address to listen on")
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    args = parser.parse_args(argv)
    with _create_server(args.host, args.port) as sock:
        _print(f"[INFO] Server listening on port {args.port}...\n")
        try:
            serve(sock)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())