"""HTTP request-line model and parser."""

from dataclasses import dataclass

from config import MAX_METHOD_LENGTH, MAX_URL_LENGTH


class HTTPRequestParseError(ValueError):
    """Base error for request bytes that cannot be turned into a request."""


class MalformedRequestError(HTTPRequestParseError):
    """Raised when the request line lacks its method or URL delimiter."""


@dataclass(slots=True, frozen=True)
class HTTPRequest:
    method: str
    url: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", truncate(self.method, MAX_METHOD_LENGTH))
        object.__setattr__(self, "url", truncate(self.url, MAX_URL_LENGTH))

    @classmethod
    def from_bytes(cls, raw: bytes) -> "HTTPRequest":
        """Parse ``<METHOD> <URL> <anything>`` into a request.

        Input stops at the first NUL byte. Everything after the second space,
        including the HTTP version and any headers, is discarded.
        """
        text = raw.split(b"\x00", 1)[0].decode("iso-8859-1")

        method, sep, remainder = text.partition(" ")
        if not sep:
            raise MalformedRequestError("missing method delimiter")

        url, sep, _rest = remainder.partition(" ")
        if not sep:
            raise MalformedRequestError("missing url delimiter")

        return cls(method=method, url=url)


def truncate(value: str, limit: int) -> str:
    """Clip ``value`` to at most ``limit`` characters."""
    return value[:limit]
