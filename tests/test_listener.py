"""Tests for listening socket setup and accept error mapping."""

import socket

import pytest

from listener import (
    AcceptError,
    BindError,
    ListenerError,
    accept_connection,
    open_listener,
)


def test_open_listener_binds_and_accepts_a_client() -> None:
    listener = open_listener(0, "127.0.0.1")
    with listener:
        port = listener.getsockname()[1]
        with socket.create_connection(("127.0.0.1", port), timeout=2.0) as client:
            client.sendall(b"ping")
            conn, address = accept_connection(listener)
            with conn:
                assert conn.recv(4) == b"ping"

    assert address[0] == "127.0.0.1"


def test_open_listener_rejects_unrecognized_address() -> None:
    with pytest.raises(ValueError, match="Unsupported listen address"):
        open_listener(0, "10.1.2.3")


def test_bind_error_when_port_is_taken() -> None:
    first = open_listener(0, "127.0.0.1")
    with first:
        port = first.getsockname()[1]

        with pytest.raises(BindError) as exc_info:
            open_listener(port, "127.0.0.1")

    assert isinstance(exc_info.value, ListenerError)
    assert str(port) in str(exc_info.value)


def test_accept_on_closed_listener_raises_accept_error() -> None:
    listener = open_listener(0, "127.0.0.1")
    listener.close()

    with pytest.raises(AcceptError):
        accept_connection(listener)


def test_accept_poll_timeout_is_not_an_accept_error() -> None:
    listener = open_listener(0, "127.0.0.1")
    with listener:
        listener.settimeout(0.05)

        with pytest.raises(socket.timeout):
            accept_connection(listener)
