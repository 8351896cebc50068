"""HTTP/1.0 response head and body serializers."""

from config import SERVER_NAME

FIXED_HEADERS: tuple[tuple[str, str], ...] = (
    ("Server", SERVER_NAME),
    ("Cache-Control", "no-store"),
    ("Content-Language", "en"),
    ("X-Frame-Options", "SAMEORIGIN"),
)


def format_status_headers(status_code: int) -> bytes:
    """Status line plus the fixed header set, left open for entity headers."""
    lines = [f"HTTP/1.0 {status_code} OK HTTP Status"]
    lines.extend(f"{name}: {value}" for name, value in FIXED_HEADERS)
    return ("\n".join(lines) + "\n").encode("iso-8859-1")


def format_entity_headers(content_type: str, content_length: int) -> bytes:
    """``Content-Type``/``Content-Length`` and the blank line closing the head."""
    return (
        f"Content-Type: {content_type}\n"
        f"Content-Length: {content_length}\n"
        "\n"
    ).encode("iso-8859-1")


def format_inline_response(content_type: str, body: str) -> bytes:
    body_bytes = body.encode("utf-8")
    return format_entity_headers(content_type, len(body_bytes)) + body_bytes + b"\n"
