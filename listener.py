"""Listening socket lifecycle: create, bind, listen and accept."""

from __future__ import annotations

import socket

from config import LISTEN_ADDR, LISTEN_BACKLOG, RECOGNIZED_LISTEN_ADDRS

ClientAddress = tuple[str, int]


class ListenerError(Exception):
    """Raised when the listening socket cannot be set up or used."""


class SocketError(ListenerError):
    """Raised when the TCP socket cannot be created."""


class BindError(ListenerError):
    """Raised when the address/port pair is unavailable."""


class ListenError(ListenerError):
    """Raised when the socket cannot be marked passive."""


class AcceptError(ListenerError):
    """Raised when the OS fails to hand over a pending connection."""


def open_listener(
    port: int,
    host: str = LISTEN_ADDR,
    backlog: int = LISTEN_BACKLOG,
) -> socket.socket:
    """Return a bound TCP/IPv4 socket listening on ``host:port``."""
    if host not in RECOGNIZED_LISTEN_ADDRS:
        raise ValueError(f"Unsupported listen address: {host}")

    try:
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError as exc:
        raise SocketError(f"Socket creation failed: {exc}") from exc

    try:
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        listener.bind((host, port))
    except OSError as exc:
        listener.close()
        raise BindError(f"Bind to {host}:{port} failed: {exc}") from exc

    try:
        listener.listen(backlog)
    except OSError as exc:
        listener.close()
        raise ListenError(f"Listen on {host}:{port} failed: {exc}") from exc

    return listener


def accept_connection(listener: socket.socket) -> tuple[socket.socket, ClientAddress]:
    """Block until a client connects and return its socket and address.

    A poll timeout configured on the listener is re-raised untouched so the
    accept loop can tell "nobody connected yet" apart from a real failure.
    """
    try:
        return listener.accept()
    except socket.timeout:
        raise
    except OSError as exc:
        raise AcceptError(f"Accept failed: {exc}") from exc
