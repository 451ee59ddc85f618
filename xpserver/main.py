"""Command entry point: a reversing echo server on several ports."""

from __future__ import annotations

import argparse
from typing import Iterable, Sequence

from xpserver.listener import Listener
from xpserver.logger import LogLevel, logger
from xpserver.loop import EventLoop
from xpserver.utils import is_valid_port

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORTS = (8001, 8002, 8003, 8004)


def create_listeners(loop: EventLoop, host: str, ports: Iterable[int]) -> list[Listener]:
    """Create a listener per port; ports that cannot be bound are skipped."""
    listeners = []
    for port in ports:
        try:
            listeners.append(Listener(loop, host, port))
        except OSError:
            continue
        logger(LogLevel.INFO, "main()", "Server listening to port %u", port)
    return listeners


def _port(text: str) -> int:
    try:
        port = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a port number: {text!r}") from None
    if not is_valid_port(port):
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xpserver", description="Reversing echo server.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument(
        "--ports",
        nargs="+",
        type=_port,
        default=list(DEFAULT_PORTS),
        help="ports to listen on",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the server until interrupted."""
    args = _parser().parse_args(argv)
    loop = EventLoop()
    listeners = create_listeners(loop, args.host, args.ports)
    try:
        loop.run()
    except KeyboardInterrupt:
        pass
    finally:
        for listener in listeners:
            listener.destroy()
        loop.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())