"""TCP proxy that pairs each client with its own upstream connection."""

from __future__ import annotations

import argparse
import enum
import functools
import socket
import sys
from typing import Iterator, Sequence

from xpserver.loop import EventLoop

PORT = 8080
LISTEN_HOST = "127.0.0.1"
UPSTREAM_HOST = "127.0.0.1"
UPSTREAM_PORT = 3000
BUFF_SIZE = 10000
MAX_ACCEPT_BACKLOG = 5


def _print(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


class Role(enum.Enum):
    """Which side of a route a socket belongs to."""

    CLIENT = "client"
    UPSTREAM = "upstream"


class RouteTable:
    """Pairs of client and upstream sockets, looked up from either side."""

    def __init__(self) -> None:
        self._upstream_of: dict[object, object] = {}
        self._client_of: dict[object, object] = {}

    def add(self, client: object, upstream: object) -> None:
        """Record that client traffic goes to upstream and back."""
        self._upstream_of[client] = upstream
        self._client_of[upstream] = client

    def upstream_for(self, client: object) -> object | None:
        """Return the upstream paired with client, or None."""
        return self._upstream_of.get(client)

    def client_for(self, upstream: object) -> object | None:
        """Return the client paired with upstream, or None."""
        return self._client_of.get(upstream)

    def role(self, sock: object) -> Role | None:
        """Return whether sock is a client or an upstream, or None if unknown."""
        if sock in self._upstream_of:
            return Role.CLIENT
        if sock in self._client_of:
            return Role.UPSTREAM
        return None

    def __iter__(self) -> Iterator[tuple[object, object]]:
        return iter(list(self._upstream_of.items()))

    def __len__(self) -> int:
        return len(self._upstream_of)


class TcpProxy:
    """Listens for clients and relays their bytes to and from an upstream server."""

    def __init__(
        self,
        listen_host: str = LISTEN_HOST,
        listen_port: int = PORT,
        upstream_host: str = UPSTREAM_HOST,
        upstream_port: int = UPSTREAM_PORT,
    ) -> None:
        self.upstream_address = (upstream_host, upstream_port)
        self.routes = RouteTable()
        self.loop = EventLoop()
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((listen_host, listen_port))
            sock.listen(MAX_ACCEPT_BACKLOG)
        except OSError:
            sock.close()
            self.loop.close()
            raise
        self.sock = sock
        self.address = sock.getsockname()
        self.loop.attach(sock, self.accept_connection)
        _print(f"[INFO] Server listening on port {self.address[1]}...\n")

    def __enter__(self) -> "TcpProxy":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def accept_connection(self) -> tuple[socket.socket, socket.socket] | None:
        """Accept a client, open its upstream connection and return the pair."""
        conn, _ = self.sock.accept()
        conn.setblocking(True)
        _print("[INFO] Client connected to the server.\n")
        upstream = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            upstream.connect(self.upstream_address)
        except OSError:
            _print("[ERROR] Failed to connect to upstream server\n")
            upstream.close()
            conn.close()
            return None
        self.loop.attach(conn, functools.partial(self._dispatch, conn))
        self.loop.attach(upstream, functools.partial(self._dispatch, upstream))
        self.routes.add(conn, upstream)
        return conn, upstream

    def _dispatch(self, sock: socket.socket) -> None:
        role = self.routes.role(sock)
        if role is Role.CLIENT:
            self.handle_client(sock)
        elif role is Role.UPSTREAM:
            self.handle_upstream(sock)

    def handle_client(self, sock: socket.socket) -> None:
        """Forward bytes from a client to its upstream."""
        self._relay(sock, self.routes.upstream_for(sock), Role.CLIENT)

    def handle_upstream(self, sock: socket.socket) -> None:
        """Forward bytes from an upstream to its client."""
        self._relay(sock, self.routes.client_for(sock), Role.UPSTREAM)

    def _relay(self, sock: socket.socket, peer: object | None, side: Role) -> None:
        try:
            data = sock.recv(BUFF_SIZE)
        except OSError:
            data = b""
        if not data:
            _print(f"[ERROR] Error encountered, Closing connection (handle {side.value})\n")
            self._drop(sock)
            return
        if side is Role.CLIENT:
            _print("[CLIENT MESSAGE] " + data.decode("utf-8", errors="replace"))
        if not isinstance(peer, socket.socket):
            return
        try:
            peer.sendall(data)
        except OSError:
            pass

    def _drop(self, sock: socket.socket) -> None:
        self.loop.detach(sock)
        sock.close()

    def run_once(self, timeout: float | None) -> int:
        """Dispatch ready sockets once, waiting up to timeout seconds."""
        return self.loop.run_once(timeout)

    def run(self) -> None:
        """Relay traffic forever."""
        while True:
            _print("[DEBUG] Epoll wait\n")
            self.run_once(None)

    def close(self) -> None:
        """Close every routed socket, the listener and the loop."""
        for client, upstream in self.routes:
            for sock in (client, upstream):
                if isinstance(sock, socket.socket):
                    self._drop(sock)
        self._drop(self.sock)
        self.loop.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the proxy until interrupted."""
    parser = argparse.ArgumentParser(prog="tcp-proxy", description="TCP proxy.")
    parser.add_argument("--host", default=LISTEN_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    parser.add_argument("--upstream-host", default=UPSTREAM_HOST, help="upstream address")
    parser.add_argument("--upstream-port", type=int, default=UPSTREAM_PORT, help="upstream port")
    args = parser.parse_args(argv)
    with TcpProxy(args.host, args.port, args.upstream_host, args.upstream_port) as proxy:
        try:
            proxy.run()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())