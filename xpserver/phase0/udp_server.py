"""Reversing UDP server answering each datagram from its own thread."""

from __future__ import annotations

import argparse
import socket
import sys
import threading
from typing import Any, Sequence

PORT = 8080
BUFF_SIZE = 10000


def reverse_message(data: bytes) -> bytes:
    """Return the text before the first NUL byte, reversed."""
    return data.split(b"\0", 1)[0][::-1]


def handle_client(sock: socket.socket, message: bytes, address: Any) -> bytes:
    """Print a message, send it back reversed to address and return the reply."""
    text = message.split(b"\0", 1)[0]
    sys.stdout.write("[CLIENT MESSAGE] " + text.decode("utf-8", errors="replace") + "\n")
    sys.stdout.flush()
    reply = reverse_message(message)
    sock.sendto(reply, address)
    return reply


def serve(sock: socket.socket) -> None:
    """Receive datagrams forever, answering each in a separate thread."""
    while True:
        message, address = sock.recvfrom(BUFF_SIZE)
        try:
            threading.Thread(
                target=handle_client, args=(sock, message, address), daemon=True
            ).start()
        except RuntimeError:
            sys.stdout.write("Failed to create thread\n")
            sys.stdout.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the reversing UDP server."""
    parser = argparse.ArgumentParser(prog="udp-server", description="Reversing UDP server.")
    parser.add_argument("--host", default="", help="address to listen on")
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    args = parser.parse_args(argv)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind((args.host, args.port))
        print(f"[INFO] server listening on port {args.port}")
        try:
            serve(sock)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())