"""Interactive TCP client: sends each input line and prints the reply."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Sequence, TextIO

SERVER_PORT = 8080
SERVER_HOST = "127.0.0.1"
BUFF_SIZE = 10000


def chat(sock: socket.socket, stdin: TextIO, stdout: TextIO) -> None:
    """Send lines from stdin and print each server reply to stdout.

    Raises EOFError when stdin ends and ConnectionError when the server goes away.
    """
    while True:
        line = stdin.readline()
        if not line:
            raise EOFError("end of input")
        sock.sendall(line.encode("utf-8"))
        reply = sock.recv(BUFF_SIZE)
        if not reply:
            raise ConnectionError("server closed the connection")
        stdout.write("[SERVER MESSAGE] " + reply.decode("utf-8", errors="replace"))
        stdout.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Connect to the server and relay stdin lines until an error."""
    parser = argparse.ArgumentParser(prog="tcp-client", description="Interactive TCP client.")
    parser.add_argument("--host", default=SERVER_HOST, help="server address")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="server port")
    args = parser.parse_args(argv)

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    with sock:
        try:
            sock.connect((args.host, args.port))
        except OSError:
            print("[ERROR] Failed to connect to tcp server")
            return 1
        print("[INFO] Connected to tcp server")
        try:
            chat(sock, sys.stdin, sys.stdout)
        except EOFError:
            print("[ERROR] Error encountered")
            return 1
        except (ConnectionError, OSError):
            print("[ERROR] Error encountered, closing the connection")
            return 1
        except KeyboardInterrupt:
            return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main())