"""File transfer server: writes what one client sends into a file."""

from __future__ import annotations

import argparse
import os
import socket
import sys
from typing import Sequence, Union

PORT = 8080
BUFF_SIZE = 100000
MAX_ACCEPT_BACKLOG = 5
DEFAULT_FILE = "../files/t2.txt"

PathLike = Union[str, "os.PathLike[str]"]


def _print(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def write_to_file(sock: socket.socket, path: PathLike) -> int:
    """Receive until the peer closes, writing each chunk's text to path.

    Each chunk is cut at its first NUL byte. Returns the bytes written.
    """
    written = 0
    with open(path, "wb") as fp:
        _print("[INFO] Recieving data from the client...\n")
        while True:
            try:
                chunk = sock.recv(BUFF_SIZE)
            except OSError:
                _print("[-] Error recieving data\n")
                break
            if not chunk:
                break
            text = chunk.split(b"\0", 1)[0]
            _print("[FILE DATA] " + text.decode("utf-8", errors="replace"))
            fp.write(text)
            written += len(text)
    _print("[INFO] Data transfer successful\n")
    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Accept one client and store what it sends."""
    parser = argparse.ArgumentParser(prog="ft-server", description="File transfer server.")
    parser.add_argument("--host", default="", help="address to listen on")
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    parser.add_argument("--file", default=DEFAULT_FILE, help="file to write")
    args = parser.parse_args(argv)

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listen_sock:
        listen_sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        listen_sock.bind((args.host, args.port))
        listen_sock.listen(MAX_ACCEPT_BACKLOG)
        _print(f"[INFO] Server listening to port {args.port}...\n")
        conn, _ = listen_sock.accept()
        with conn:
            _print("[INFO] Client connected to server\n")
            try:
                write_to_file(conn, args.file)
            except OSError:
                _print("[-] Error creating the file.\n")
                return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())