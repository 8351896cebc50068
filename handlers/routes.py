"""Route handlers for the image tree, the demo page and unknown URLs."""

import socket

from config import STATIC_CONTENT_TYPE
from file_reader import StaticFileNotFound, read_file
from request import HTTPRequest
from router import RouteOutcome
from socket_handler import write_file_response, write_inline_response, write_status_headers
from utils import build_static_path

NOT_FOUND_BODY = "<html>File Not Found</html>"
WEBPAGE_BODY = "<html><img src='/img/test.png' alt='image' /></html>"


def serve_image(client_socket: socket.socket, request: HTTPRequest) -> RouteOutcome:
    """Stream ``./<url>`` as ``image/png``, or answer 404 if it cannot be opened.

    ``StaticFileReadError`` and ``ResponseWriteError`` propagate to the
    connection dispatcher, which drops the connection. Once the 200 head is on
    the wire nothing else is appended to it.
    """
    try:
        static_file = read_file(build_static_path(request.url))
    except StaticFileNotFound:
        return not_found(client_socket, request)

    bytes_sent = write_status_headers(client_socket, 200)
    bytes_sent += write_file_response(client_socket, STATIC_CONTENT_TYPE, static_file)
    return RouteOutcome(status_code=200, bytes_sent=bytes_sent)


def webpage(client_socket: socket.socket, request: HTTPRequest) -> RouteOutcome:
    _ = request
    bytes_sent = write_status_headers(client_socket, 200)
    bytes_sent += write_inline_response(client_socket, "text/html", WEBPAGE_BODY)
    return RouteOutcome(status_code=200, bytes_sent=bytes_sent)


def not_found(client_socket: socket.socket, request: HTTPRequest) -> RouteOutcome:
    _ = request
    bytes_sent = write_status_headers(client_socket, 404)
    bytes_sent += write_inline_response(client_socket, "text/plain", NOT_FOUND_BODY)
    return RouteOutcome(status_code=404, bytes_sent=bytes_sent)
