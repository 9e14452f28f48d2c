"""JSON encoding and decoding helpers."""

from __future__ import annotations

import base64
import dataclasses
import json
from typing import Any

__all__ = ["ENCODING_FAILURE", "to_json", "parse_json"]

ENCODING_FAILURE = "encoding failure"

_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _default(obj: Any) -> Any:
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"cannot encode {type(obj).__qualname__}")


def to_json(v: Any) -> str:
    """Encode `v` as compact JSON with sorted keys and HTML-safe escapes.

    Returns ``"encoding failure"`` when `v` cannot be encoded.
    """
    try:
        text = json.dumps(
            v,
            default=_default,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError):
        return ENCODING_FAILURE
    for char, escape in _ESCAPES.items():
        text = text.replace(char, escape)
    return text


def parse_json(data: str | bytes | bytearray) -> Any:
    """Decode a JSON document; raise json.JSONDecodeError on bad input."""
    return json.loads(data)