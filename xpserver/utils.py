"""Socket helpers."""

from __future__ import annotations

import socket

from xpserver.logger import LogLevel, logger


def is_valid_port(port: int) -> bool:
    """Return True if port lies in the TCP/UDP range 0..65535."""
    return isinstance(port, int) and 0 <= port <= 65535


def resolve_address(host: str, port: int) -> tuple[str, int]:
    """Resolve host and port to an IPv4 stream socket address."""
    if host is None:
        raise ValueError("host must not be None")
    if not is_valid_port(port):
        raise ValueError(f"invalid port: {port!r}")
    try:
        results = socket.getaddrinfo(host, str(port), socket.AF_INET, socket.SOCK_STREAM)
    except OSError:
        logger(LogLevel.ERROR, "resolve_address()", "getaddrinfo() error")
        raise
    if not results:
        logger(LogLevel.ERROR, "resolve_address()", "getaddrinfo() error")
        raise OSError(f"cannot resolve {host}:{port}")
    ip, resolved_port = results[0][4][:2]
    logger(
        LogLevel.DEBUG,
        "resolve_address()",
        "host: %s, port: %u, resolved ip: %s",
        host,
        port,
        ip,
    )
    return ip, resolved_port


def make_socket_non_blocking(sock: socket.socket) -> None:
    """Put sock into non-blocking mode."""
    try:
        sock.setblocking(False)
    except OSError:
        logger(LogLevel.ERROR, "make_socket_non_blocking()", "failed to set flags")
        raise


def get_remote_ip(sock: socket.socket) -> str:
    """Return the IP address of the peer connected to sock."""
    try:
        peer = sock.getpeername()
    except OSError:
        logger(LogLevel.ERROR, "get_remote_ip()", "getpeername() failed")
        raise
    if not isinstance(peer, tuple):
        logger(LogLevel.ERROR, "get_remote_ip()", "getpeername() failed")
        raise OSError("peer is not an internet address")
    return peer[0]