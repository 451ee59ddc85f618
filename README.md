# xpserver

xpserver is a small single-threaded TCP server built around an event loop
that watches any number of listening sockets and client connections. It comes
with a set of simpler socket tools that show the building blocks one at a
time.

It needs only the Python standard library (3.10 or later).

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## The server

```
xpserver
```

This opens listeners on `127.0.0.1`, ports 8001 to 8004, and serves them all
from one event loop until interrupted. Each client connection answers every
message it receives with the message reversed, except for its last character
(normally the newline), which stays at the end. When the peer closes, the
connection is removed from the loop and closed.

Options:

- `--host ADDRESS` – address to listen on (default `127.0.0.1`).
- `--ports PORT [PORT ...]` – ports to listen on (default `8001 8002 8003 8004`).
  A port that cannot be bound is skipped.

Any line-based TCP client can be used to try it out, for example the bundled
`xps-tcp-client` (with `--port 8001`) or `nc 127.0.0.1 8001`.

### Logging

Log lines go to standard output. Each one has a coloured level tag (ERROR,
INFO, DEBUG, WARNING, HTTP) and the name of the function that wrote it. Debug
lines appear only when the environment variable `XPS_DEBUG` is set to `1`:

```
XPS_DEBUG=1 xpserver
```

### Using it as a library

- `xpserver.loop.EventLoop` has `attach(sock, handler)`, `detach(sock)`,
  `run_once(timeout)` (returns the number of handlers called), `run()` and
  `close()`, and can be used as a context manager.
- `xpserver.listener.Listener(loop, host, port)` binds a non-blocking listening
  socket; `connection_handler()` accepts one client and returns its
  `Connection`, and `destroy()` closes the listener.
- `xpserver.connection.Connection(loop, sock)` wraps an accepted socket;
  `read_handler()` answers one read with `reverse_message(data)`, and
  `destroy()` closes it.
- `xpserver.main.create_listeners(loop, host, ports)` opens one listener per
  port and returns the ones that could be bound.
- `xpserver.utils` provides `is_valid_port`, `resolve_address`,
  `make_socket_non_blocking` and `get_remote_ip`.
- `xpserver.logger.logger(level, function_name, format_string, *args)` writes
  a log line at a `LogLevel`, formatting `args` with `%`.

A minimal server on one port:

```python
from xpserver.loop import EventLoop
from xpserver.listener import Listener

loop = EventLoop()
Listener(loop, "127.0.0.1", 9000)
loop.run()
```

## The socket tools

Small stand-alone programs, each showing one technique. All default to port
8080; clients connect to `127.0.0.1`. Each takes `--host` and `--port`.

| Command | What it does |
| --- | --- |
| `xps-tcp-server` | TCP server on all interfaces, driven by a readiness loop. Sends each message back reversed, its last character kept at the end. |
| `xps-tcp-client` | Reads lines from standard input, sends them to the TCP server and prints each reply. |
| `xps-tcp-multi-client` | Starts several clients at once (`--clients`, default 3). Each sends `hello` and prints the reply. |
| `xps-udp-server` | UDP server on all interfaces that answers each datagram with its text reversed, one thread per datagram. |
| `xps-udp-client` | Prompts for a string, sends it over UDP without its newline and prints the reply. |
| `xps-tcp-proxy` | Listens on `127.0.0.1:8080`. For every client it opens a connection to an upstream (`--upstream-host`, `--upstream-port`, default `127.0.0.1:3000`) and relays data both ways. |
| `xps-ft-server` | Accepts one client and writes everything it receives to a file (`--file`, default `../files/t2.txt`). |
| `xps-ft-client` | Connects to the file-transfer server and sends a file line by line (`--file`, default `../files/t1.txt`). |

A typical session with the echo pair, in two terminals:

```
xps-tcp-server
```

```
xps-tcp-client
hello
[SERVER MESSAGE] olleh
```

## What it does not do

Despite the event-loop structure, `xpserver` does not speak HTTP: it does not
parse requests, serve files or act as a web proxy. Every connection is a plain
reversing echo. There is no configuration file; host and ports come only from
the command-line options above.