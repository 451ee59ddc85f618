"""Several concurrent TCP clients that each send one greeting."""

from __future__ import annotations

import argparse
import socket
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

SERVER_PORT = 8080
SERVER_ADDR = "127.0.0.1"
BUFF_SIZE = 10000
NUM_CLIENTS = 3
MESSAGE = b"hello\n"


def _print(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def client_process(client_id: int, host: str = SERVER_ADDR, port: int = SERVER_PORT) -> bytes:
    """Connect, send one greeting and return the server's reply."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    with sock:
        try:
            sock.connect((host, port))
        except OSError:
            _print(f"[Client {client_id}][ERROR] Failed to connect to server\n")
            raise
        _print(f"[Client {client_id}][INFO] Connected to the server\n")

        sock.sendall(MESSAGE)
        _print(f"[Client {client_id}]Sent: {MESSAGE.decode()}\n")

        reply = sock.recv(BUFF_SIZE)
        if not reply:
            _print(f"[Client {client_id}][INFO] Server disconnected. Closing connection.\n")
            raise ConnectionError("server disconnected")
        _print(
            f"[Client {client_id}] [SERVER MESSAGE] "
            + reply.decode("utf-8", errors="replace")
        )
        return reply


def main(argv: Sequence[str] | None = None) -> int:
    """Run the clients concurrently and wait for all of them."""
    parser = argparse.ArgumentParser(prog="tcp-multi-client", description="Concurrent TCP clients.")
    parser.add_argument("--host", default=SERVER_ADDR, help="server address")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="server port")
    parser.add_argument("--clients", type=int, default=NUM_CLIENTS, help="number of clients")
    args = parser.parse_args(argv)

    with ThreadPoolExecutor(max_workers=max(args.clients, 1)) as pool:
        futures = [
            pool.submit(client_process, client_id, args.host, args.port)
            for client_id in range(1, args.clients + 1)
        ]
    for future in futures:
        # Failures have already been reported by the client itself.
        future.exception()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())