"""Interactive UDP client: sends each input line and prints the reply."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Any, Sequence, TextIO

SERVER_PORT = 8080
SERVER_HOST = "127.0.0.1"
BUFF_SIZE = 10000


def run_client(sock: socket.socket, address: Any, stdin: TextIO, stdout: TextIO) -> None:
    """Prompt for lines, send each without its last character and print the reply.

    Returns when stdin is exhausted.
    """
    while True:
        stdout.write("Enter a string: ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            return
        sock.sendto(line.encode("utf-8")[:-1], address)
        reply, _ = sock.recvfrom(BUFF_SIZE)
        stdout.write("[SERVER MESSAGE] " + reply.decode("utf-8", errors="replace") + "\n")
        stdout.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Talk to the UDP server until input ends."""
    parser = argparse.ArgumentParser(prog="udp-client", description="Interactive UDP client.")
    parser.add_argument("--host", default=SERVER_HOST, help="server address")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="server port")
    args = parser.parse_args(argv)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        try:
            run_client(sock, (args.host, args.port), sys.stdin, sys.stdout)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())