"""Small file helpers."""

from __future__ import annotations

import os

__all__ = ["count_line", "touch_file", "is_file_exists"]

_CHUNK_SIZE = 32 * 1024


def count_line(file_name: str | os.PathLike) -> int:
    """Return the number of newline characters in the file."""
    with open(file_name, "rb") as f:
        return sum(chunk.count(b"\n") for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""))


def touch_file(file_name: str | os.PathLike) -> None:
    """Create the file, truncating it if it already exists."""
    with open(file_name, "wb"):
        pass


def is_file_exists(file_name: str | os.PathLike) -> bool:
    """Return whether the path exists; errors other than absence propagate."""
    try:
        os.stat(file_name)
    except FileNotFoundError:
        return False
    return True