"""32-bit string hashes."""

from __future__ import annotations

import zlib

__all__ = ["crc32", "fnv32a"]

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193


def _as_bytes(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def crc32(data: str | bytes) -> int:
    """Return the IEEE CRC-32 of `data`."""
    return zlib.crc32(_as_bytes(data)) & 0xFFFFFFFF


def fnv32a(data: str | bytes) -> int:
    """Return the 32-bit FNV-1a hash of `data`."""
    h = _FNV32_OFFSET
    for byte in _as_bytes(data):
        h = ((h ^ byte) * _FNV32_PRIME) & 0xFFFFFFFF
    return h