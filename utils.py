"""Utility helpers shared across server modules."""

from config import MAX_STATIC_PATH_LENGTH


def build_static_path(url: str) -> bytes:
    """Map a ``/img/...`` URL onto a path relative to the working directory.

    The path is built from the request's own bytes so non-ASCII names reach
    the filesystem unchanged. No traversal check is made: ``/img/../secret``
    resolves to ``./img/../secret``. Callers must only expose this on trusted
    trees.
    """
    return (b"." + url.encode("iso-8859-1"))[:MAX_STATIC_PATH_LENGTH]
