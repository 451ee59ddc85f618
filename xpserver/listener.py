"""Listening sockets that accept clients into the event loop."""

from __future__ import annotations

import socket

from xpserver.connection import Connection
from xpserver.logger import LogLevel, logger
from xpserver.loop import DEFAULT_BACKLOG, EventLoop
from xpserver.utils import is_valid_port, resolve_address


class Listener:
    """A non-blocking TCP listening socket attached to an event loop."""

    def __init__(self, loop: EventLoop, host: str, port: int) -> None:
        if host is None:
            raise ValueError("host must not be None")
        if not is_valid_port(port):
            raise ValueError(f"invalid port: {port!r}")

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setblocking(False)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            address = resolve_address(host, port)
            try:
                sock.bind(address)
            except OSError:
                logger(LogLevel.ERROR, "Listener()", "failed to bind() to %s:%u", host, port)
                raise
            sock.listen(DEFAULT_BACKLOG)
        except OSError:
            sock.close()
            raise

        self.loop = loop
        self.host = host
        self.port = port
        self.sock = sock
        self.connections: list[Connection] = []
        loop.attach(sock, self.connection_handler)
        logger(LogLevel.DEBUG, "Listener()", "created listener port on %d", port)

    def connection_handler(self) -> Connection | None:
        """Accept one pending client and return its connection."""
        try:
            conn_sock, _ = self.sock.accept()
        except OSError as exc:
            logger(LogLevel.ERROR, "Listener.connection_handler()", "accept() failed: %s", exc)
            return None
        conn_sock.setblocking(True)
        try:
            client = Connection(self.loop, conn_sock)
        except (OSError, ValueError, KeyError):
            logger(LogLevel.ERROR, "Listener.connection_handler()", "Connection() failed")
            conn_sock.close()
            return None
        client.listener = self
        self.connections.append(client)
        logger(LogLevel.INFO, "Listener.connection_handler()", "new connection")
        return client

    def destroy(self) -> None:
        """Detach from the loop and close the listening socket."""
        self.loop.detach(self.sock)
        self.sock.close()
        logger(LogLevel.DEBUG, "Listener.destroy()", "destroyed listener on port %d", self.port)