"""Unit tests for HTTP request-line parsing."""

import dataclasses

import pytest

from request import HTTPRequest, HTTPRequestParseError, MalformedRequestError


def test_parse_get_request_line() -> None:
    raw = b"GET /app/webpage HTTP/1.0\r\nHost: localhost\r\n\r\n"

    request = HTTPRequest.from_bytes(raw)

    assert request.method == "GET"
    assert request.url == "/app/webpage"


def test_everything_after_second_space_is_ignored() -> None:
    first = HTTPRequest.from_bytes(b"GET /img/a.png HTTP/1.0\r\n\r\n")
    second = HTTPRequest.from_bytes(b"GET /img/a.png whatever else goes here")

    assert first == second


def test_method_is_truncated_to_seven_characters() -> None:
    request = HTTPRequest.from_bytes(b"PROPFINDX / HTTP/1.0\r\n")

    assert request.method == "PROPFIN"
    assert request.url == "/"


def test_url_is_truncated_to_127_characters() -> None:
    url = "/img/" + "a" * 200
    raw = f"GET {url} HTTP/1.0\r\n".encode("ascii")

    request = HTTPRequest.from_bytes(raw)

    assert len(request.url) == 127
    assert request.url == url[:127]


def test_missing_space_raises_method_delimiter_error() -> None:
    with pytest.raises(MalformedRequestError, match="missing method delimiter"):
        HTTPRequest.from_bytes(b"BROKEN-LINE\r\n\r\n")


def test_missing_second_space_raises_url_delimiter_error() -> None:
    with pytest.raises(MalformedRequestError, match="missing url delimiter"):
        HTTPRequest.from_bytes(b"GET /app/webpage")


def test_empty_input_is_malformed() -> None:
    with pytest.raises(HTTPRequestParseError):
        HTTPRequest.from_bytes(b"")


def test_parse_stops_at_first_nul_byte() -> None:
    with pytest.raises(MalformedRequestError, match="missing url delimiter"):
        HTTPRequest.from_bytes(b"GET /img/a.png\x00 HTTP/1.0\r\n")


def test_second_space_may_come_from_a_later_line() -> None:
    request = HTTPRequest.from_bytes(b"GET /app/webpage\r\nHost: localhost\r\n")

    assert request.url == "/app/webpage\r\nHost:"


def test_method_and_url_are_not_validated() -> None:
    request = HTTPRequest.from_bytes(b"get ../../etc/passwd HTTP/1.0")

    assert request.method == "get"
    assert request.url == "../../etc/passwd"


def test_malformed_request_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        HTTPRequest.from_bytes(b"NOSPACE")


def test_request_is_immutable() -> None:
    request = HTTPRequest(method="GET", url="/")

    with pytest.raises(dataclasses.FrozenInstanceError):
        request.url = "/other"  # type: ignore[misc]


def test_direct_construction_applies_the_same_bounds() -> None:
    request = HTTPRequest(method="OPTIONS-LONG", url="/" + "x" * 300)

    assert request.method == "OPTIONS"
    assert len(request.url) == 127
