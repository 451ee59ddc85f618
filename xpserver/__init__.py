"""Event-loop TCP server that echoes messages reversed, with listeners, connections, logging and socket helpers."""

__version__ = "0.1.0"