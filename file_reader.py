"""Whole-file loader used by the static route."""

from __future__ import annotations

import os
from dataclasses import dataclass

from config import MAX_FILE_NAME_LENGTH, READ_CHUNK_SIZE
from request import truncate


class StaticFileError(Exception):
    """Base error for files that cannot be served."""


class StaticFileNotFound(StaticFileError):
    """Raised when a file cannot be opened (missing or not permitted)."""


class StaticFileReadError(StaticFileError):
    """Raised when reading an opened file fails part-way."""


@dataclass(slots=True)
class StaticFile:
    name: str
    contents: bytes
    size: int


def read_file(path: str | bytes, *, chunk_size: int = READ_CHUNK_SIZE) -> StaticFile:
    """Load ``path`` fully into memory, ``chunk_size`` bytes per read."""
    display_name = os.fsdecode(path)
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError as exc:
        raise StaticFileNotFound(f"Cannot open {display_name}: {exc}") from exc

    contents = bytearray()
    try:
        while True:
            try:
                chunk = os.read(fd, chunk_size)
            except OSError as exc:
                contents.clear()
                raise StaticFileReadError(f"Read of {display_name} failed: {exc}") from exc
            if not chunk:
                break
            contents.extend(chunk)
    finally:
        os.close(fd)

    return StaticFile(
        name=truncate(display_name, MAX_FILE_NAME_LENGTH),
        contents=bytes(contents),
        size=len(contents),
    )
