[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xpserver"
version = "0.1.0"
description = "A small event-loop TCP server that echoes messages reversed, with a set of socket tools: echo servers, clients, a proxy and a file transfer pair"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tcp",
    "udp",
    "socket",
    "server",
    "event-loop",
    "selectors",
    "proxy",
    "networking",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xpserver = "xpserver.main:main"
xps-tcp-server = "xpserver.phase0.tcp_server:main"
xps-tcp-client = "xpserver.phase0.tcp_client:main"
xps-tcp-multi-client = "xpserver.phase0.tcp_multi_client:main"
xps-udp-server = "xpserver.phase0.udp_server:main"
xps-udp-client = "xpserver.phase0.udp_client:main"
xps-tcp-proxy = "xpserver.phase0.tcp_proxy:main"
xps-ft-client = "xpserver.phase0.ft_client:main"
xps-ft-server = "xpserver.phase0.ft_server:main"

[tool.hatch.build.targets.wheel]
packages = ["xpserver"]

[tool.pytest.ini_options]
addopts = "-ra"
