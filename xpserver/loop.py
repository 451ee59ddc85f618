"""Readiness-based event loop."""

from __future__ import annotations

import selectors
import socket
from typing import Callable

from xpserver.logger import LogLevel, logger

DEFAULT_BACKLOG = 64
MAX_EPOLL_EVENTS = 32
DEFAULT_BUFFER_SIZE = 100000

Handler = Callable[[], None]


class EventLoop:
    """Dispatches read-readiness of attached sockets to their handlers."""

    def __init__(self) -> None:
        self._selector = selectors.DefaultSelector()

    def __enter__(self) -> "EventLoop":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def attach(self, sock: socket.socket, handler: Handler) -> None:
        """Watch sock for readability and call handler when it is readable."""
        self._selector.register(sock, selectors.EVENT_READ, handler)

    def detach(self, sock: socket.socket) -> None:
        """Stop watching sock; a socket that is not attached is ignored."""
        try:
            self._selector.unregister(sock)
        except (KeyError, ValueError):
            pass

    def run_once(self, timeout: float | None) -> int:
        """Wait up to timeout seconds and dispatch ready sockets; return the count handled."""
        ready = self._selector.select(timeout)[:MAX_EPOLL_EVENTS]
        handled = 0
        for key, _mask in ready:
            # A previous handler in this batch may have detached this socket.
            if self._selector.get_map().get(key.fd) is not key:
                continue
            key.data()
            handled += 1
        return handled

    def run(self) -> None:
        """Dispatch events forever."""
        while True:
            logger(LogLevel.DEBUG, "EventLoop.run()", "epoll wait")
            self.run_once(None)
            logger(LogLevel.DEBUG, "EventLoop.run()", "epoll wait over")

    def close(self) -> None:
        """Release the underlying selector."""
        self._selector.close()