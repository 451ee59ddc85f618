"""File transfer client: streams a text file to the server line by line."""

from __future__ import annotations

import argparse
import os
import socket
import sys
from typing import Sequence, Union

SERVER_PORT = 8080
SERVER_HOST = "127.0.0.1"
DEFAULT_FILE = "../files/t1.txt"

PathLike = Union[str, "os.PathLike[str]"]


def _print(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def send_file(sock: socket.socket, path: PathLike) -> int:
    """Send the file at path over sock one line at a time; return the bytes sent."""
    with open(path, "rb") as fp:
        _print("[INFO] Sending data to server...\n")
        sent = 0
        for line in fp:
            sock.sendall(line)
            sent += len(line)
            _print("[FILE DATA] " + line.decode("utf-8", errors="replace"))
    _print("[INFO] Data sent successfully\n")
    return sent


def main(argv: Sequence[str] | None = None) -> int:
    """Connect to the server and send a file."""
    parser = argparse.ArgumentParser(prog="ft-client", description="File transfer client.")
    parser.add_argument("--host", default=SERVER_HOST, help="server address")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="server port")
    parser.add_argument("--file", default=DEFAULT_FILE, help="file to send")
    args = parser.parse_args(argv)

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.connect((args.host, args.port))
        except OSError:
            _print("[ERROR] Failed to connect to tcp server\n")
            return 1
        _print("[INFO] Connected to tcp server\n")
        try:
            send_file(sock, args.file)
        except FileNotFoundError:
            _print("[-] Error in opening file\n")
            return 1
        except OSError:
            _print("[-] Error in sending data\n")
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())