"""Accepted client connections that answer each message reversed."""

from __future__ import annotations

import socket
import sys
from typing import TYPE_CHECKING

from xpserver.logger import LogLevel, logger
from xpserver.loop import DEFAULT_BUFFER_SIZE, EventLoop
from xpserver.utils import get_remote_ip

if TYPE_CHECKING:
    from xpserver.listener import Listener


def reverse_message(data: bytes) -> bytes:
    """Reverse the text before its final character, up to the first NUL byte.

    The last character (normally the newline) stays at the end; bytes after
    the text are returned unchanged.
    """
    nul = data.find(b"\0")
    text_len = nul if nul >= 0 else len(data)
    keep = text_len - 1
    if keep <= 1:
        return data
    return data[:keep][::-1] + data[keep:]


class Connection:
    """A client socket attached to an event loop."""

    def __init__(self, loop: EventLoop, sock: socket.socket) -> None:
        self.loop = loop
        self.sock = sock
        self.listener: Listener | None = None
        self.closed = False
        try:
            self.remote_ip: str | None = get_remote_ip(sock)
        except OSError:
            self.remote_ip = None
        loop.attach(sock, self.read_handler)
        logger(LogLevel.DEBUG, "Connection()", "created connection")

    def read_handler(self) -> None:
        """Read one message and send it back reversed; close when the peer does."""
        try:
            data = self.sock.recv(DEFAULT_BUFFER_SIZE)
        except OSError as exc:
            logger(LogLevel.ERROR, "Connection.read_handler()", "recv() failed: %s", exc)
            return

        if not data:
            logger(LogLevel.INFO, "Connection.read_handler()", "peer closed the connection")
            self.destroy()
            return

        sys.stdout.write("[CLIENT MESSAGE] " + data.decode("utf-8", errors="replace"))
        sys.stdout.flush()

        try:
            self.sock.sendall(reverse_message(data))
        except OSError as exc:
            logger(LogLevel.ERROR, "Connection.read_handler()", "send() failed: %s", exc)
            self.destroy()

    def destroy(self) -> None:
        """Detach from the loop and close the socket."""
        if self.closed:
            return
        self.closed = True
        self.loop.detach(self.sock)
        self.sock.close()
        if self.listener is not None and self in self.listener.connections:
            self.listener.connections.remove(self)
        logger(LogLevel.DEBUG, "Connection.destroy()", "destroyed connection")