"""Lenient conversions from arbitrary values to scalar types.

Every converter falls back to the zero value of its target type when the
input cannot be interpreted, instead of raising.
"""

from __future__ import annotations

import enum
import math
import re
import struct
from decimal import Decimal
from typing import Any

__all__ = [
    "Kind",
    "get_bool",
    "get_string",
    "get_int",
    "get_int8",
    "get_int16",
    "get_int32",
    "get_int64",
    "get_uint",
    "get_uint8",
    "get_uint16",
    "get_uint32",
    "get_uint64",
    "get_float32",
    "get_float64",
    "string_join",
    "get_byte_array",
    "get_by_kind",
    "str2bytes",
    "bytes2str",
]

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")
_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})


class Kind(enum.Enum):
    """Scalar kinds a value can be converted to."""

    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _wrap_signed(v: int, bits: int) -> int:
    v &= (1 << bits) - 1
    if v >= 1 << (bits - 1):
        v -= 1 << bits
    return v


def _parse_signed(s: str, bits: int) -> int:
    """Parse a base-10 integer, clamping to the range of a signed `bits` integer."""
    if not _SIGNED_RE.fullmatch(s):
        return 0
    limit = 1 << (bits - 1)
    return max(-limit, min(limit - 1, int(s)))


def _parse_unsigned(s: str, bits: int) -> int:
    """Parse a base-10 unsigned integer, clamping to its maximum."""
    if not _UNSIGNED_RE.fullmatch(s):
        return 0
    return min((1 << bits) - 1, int(s))


def _parse_float(s: str) -> float:
    if not s or not s.isascii() or s != s.strip() or "_" in s:
        return 0.0
    body = s.lstrip("+-")
    if body[:2].lower() == "0x":
        if "p" not in body.lower():
            return 0.0
        try:
            return float.fromhex(s)
        except ValueError:
            return 0.0
    try:
        return float(s)
    except ValueError:
        return 0.0


def _round_float32(x: float) -> float:
    if math.isnan(x) or math.isinf(x):
        return x
    try:
        return struct.unpack("<f", struct.pack("<f", x))[0]
    except OverflowError:
        return math.copysign(math.inf, x)


def _format_float(v: float) -> str:
    """Render a float with the shortest digits, switching to exponent form
    when the decimal exponent is below -4 or at least 6."""
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "+Inf" if v > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, v) < 0 else ""
    if v == 0:
        return sign + "0"
    _, digit_tuple, exponent = Decimal(repr(abs(v))).as_tuple()
    digits = list(digit_tuple)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    text = "".join(map(str, digits))
    nd = len(text)
    dp = nd + exponent
    exp10 = dp - 1
    if exp10 < -4 or exp10 >= 6:
        mantissa = text[0] + ("." + text[1:] if nd > 1 else "")
        exp_sign = "-" if exp10 < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exp10):02d}"
    if dp <= 0:
        return f"{sign}0.{'0' * -dp}{text}"
    if dp >= nd:
        return sign + text + "0" * (dp - nd)
    return f"{sign}{text[:dp]}.{text[dp:]}"


def get_string(v: Any) -> str:
    """Convert any value to its textual form; None becomes ""."""
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    if isinstance(v, (bytes, bytearray)):
        return bytes(v).decode("utf-8", errors="replace")
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float):
        return _format_float(v)
    if isinstance(v, (list, tuple)):
        return "[" + " ".join(get_string(item) for item in v) + "]"
    if isinstance(v, dict):
        pairs = sorted((get_string(k), get_string(val)) for k, val in v.items())
        return "map[" + " ".join(f"{k}:{val}" for k, val in pairs) + "]"
    return str(v)


def get_bool(v: Any) -> bool:
    """Convert to bool; only the usual true spellings yield True."""
    return get_string(v) in _TRUE_WORDS


def get_int(v: Any) -> int:
    """Convert to a 64-bit signed integer."""
    if _is_int(v):
        return _wrap_signed(v, 64)
    return _parse_signed(get_string(v), 64)


def get_int8(v: Any) -> int:
    """Convert to an 8-bit signed integer, clamping out-of-range text."""
    return _parse_signed(get_string(v), 8)


def get_int16(v: Any) -> int:
    """Convert to a 16-bit signed integer, clamping out-of-range text."""
    return _parse_signed(get_string(v), 16)


def get_int32(v: Any) -> int:
    """Convert to a 32-bit signed integer, clamping out-of-range text."""
    return _parse_signed(get_string(v), 32)


def get_int64(v: Any) -> int:
    """Convert to a 64-bit signed integer."""
    if _is_int(v):
        return _wrap_signed(v, 64)
    return _parse_signed(get_string(v), 64)


def get_uint(v: Any) -> int:
    """Convert text to a 64-bit unsigned integer."""
    return _parse_unsigned(get_string(v), 64)


def get_uint8(v: Any) -> int:
    """Convert to an 8-bit unsigned integer, clamping out-of-range text."""
    return _parse_unsigned(get_string(v), 8)


def get_uint16(v: Any) -> int:
    """Convert to a 16-bit unsigned integer, clamping out-of-range text."""
    return _parse_unsigned(get_string(v), 16)


def get_uint32(v: Any) -> int:
    """Convert to a 32-bit unsigned integer, clamping out-of-range text."""
    return _parse_unsigned(get_string(v), 32)


def get_uint64(v: Any) -> int:
    """Convert to a 64-bit unsigned integer; integers wrap around."""
    if _is_int(v):
        return v & ((1 << 64) - 1)
    return _parse_unsigned(get_string(v), 64)


def get_float32(v: Any) -> float:
    """Convert to a float rounded to single precision."""
    return _round_float32(_parse_float(get_string(v)))


def get_float64(v: Any) -> float:
    """Convert to a float."""
    return _parse_float(get_string(v))


def string_join(*args: Any) -> str:
    """Concatenate the string forms of all arguments."""
    return "".join(get_string(arg) for arg in args)


def get_byte_array(v: Any) -> bytes | bytearray | None:
    """Return bytes for bytes-like or str input, None otherwise."""
    if isinstance(v, (bytes, bytearray)):
        return v
    if isinstance(v, str):
        return v.encode("utf-8")
    return None


def get_by_kind(kind: Kind, v: Any) -> Any:
    """Convert `v` to the given kind; strings and unknown kinds pass through."""
    converter = _CONVERTERS.get(kind)
    return converter(v) if converter else v


def str2bytes(s: str) -> bytes:
    """Encode text as UTF-8, preserving undecodable bytes from `bytes2str`."""
    return s.encode("utf-8", errors="surrogateescape")


def bytes2str(b: bytes) -> str:
    """Decode UTF-8 bytes, keeping invalid bytes recoverable."""
    return bytes(b).decode("utf-8", errors="surrogateescape")


_CONVERTERS = {
    Kind.BOOL: get_bool,
    Kind.INT: get_int,
    Kind.INT8: get_int8,
    Kind.INT16: get_int16,
    Kind.INT32: get_int32,
    Kind.INT64: get_int64,
    Kind.UINT: get_uint,
    Kind.UINT8: get_uint8,
    Kind.UINT16: get_uint16,
    Kind.UINT32: get_uint32,
    Kind.UINT64: get_uint64,
    Kind.FLOAT32: get_float32,
    Kind.FLOAT64: get_float64,
}