"""Low-level socket read/write utilities."""

from __future__ import annotations

import socket

from config import REQUEST_READ_BYTES, WRITE_CHUNK_SIZE
from file_reader import StaticFile
from response import format_entity_headers, format_inline_response, format_status_headers


class HTTPReadError(Exception):
    """Raised when request bytes cannot be read from the client socket."""


class ResponseWriteError(Exception):
    """Raised when the client stops accepting response bytes."""


def read_request_line(client_socket: socket.socket) -> bytes:
    """Read the request with a single ``recv`` of at most 511 bytes."""
    try:
        return client_socket.recv(REQUEST_READ_BYTES)
    except OSError as exc:
        raise HTTPReadError(f"Reading request failed: {exc}") from exc


def write_http_response(client_socket: socket.socket, payload: bytes) -> int:
    """Write ``payload`` in full and return its length."""
    try:
        client_socket.sendall(payload)
    except OSError as exc:
        raise ResponseWriteError(f"Writing response failed: {exc}") from exc
    return len(payload)


def write_status_headers(client_socket: socket.socket, status_code: int) -> int:
    return write_http_response(client_socket, format_status_headers(status_code))


def write_inline_response(client_socket: socket.socket, content_type: str, body: str) -> int:
    return write_http_response(client_socket, format_inline_response(content_type, body))


def write_file_response(
    client_socket: socket.socket,
    content_type: str,
    static_file: StaticFile,
    *,
    write_chunk_size: int = WRITE_CHUNK_SIZE,
) -> int:
    """Send entity headers, then the file body at most ``write_chunk_size`` per send.

    A short send only moves the cursor forward; a send that returns zero or
    raises aborts the transfer with ``ResponseWriteError``.
    """
    bytes_sent = write_http_response(
        client_socket,
        format_entity_headers(content_type, static_file.size),
    )

    view = memoryview(static_file.contents)
    offset = 0
    while offset < static_file.size:
        chunk = view[offset : offset + write_chunk_size]
        try:
            sent = client_socket.send(chunk)
        except OSError as exc:
            raise ResponseWriteError(
                f"Sending {static_file.name} failed at byte {offset}: {exc}"
            ) from exc
        if sent <= 0:
            raise ResponseWriteError(
                f"Client stopped reading {static_file.name} at byte {offset}"
            )
        offset += sent
        bytes_sent += sent

    return bytes_sent
