"""Fill dataclass instances from key/value maps using field metadata as tags.

A field's metadata plays the role of struct tags: ``metadata={"query": "id"}``
binds the field from the key ``"id"`` when binding with the ``"query"`` tag.
Sized integers and single-precision floats are declared with
``Annotated[int, Kind.INT8]`` and the like; ``Optional[X]`` fields are bound
as ``X``; ``list[X]`` fields accept separator-joined strings.

Field annotations must be type objects rather than strings: a field whose
annotation is a string is bound with the value as given.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from abc import ABC, abstractmethod
from typing import Annotated, Any, Iterator, Union

from .conv import (
    Kind,
    get_bool,
    get_float32,
    get_float64,
    get_int64,
    get_string,
    get_uint64,
)

__all__ = [
    "BIND_SLICE_SEP",
    "BindUnmarshaler",
    "fill_struct",
    "fill_struct_by_tag",
    "bind",
    "set_defaults",
    "is_type",
]

BIND_SLICE_SEP = ","
"""Separator used to split a string into list elements."""

_FIELD_TAG = "field"
_DEFAULT_TAG = "default"

_SIGNED_BITS = {Kind.INT: 64, Kind.INT8: 8, Kind.INT16: 16, Kind.INT32: 32, Kind.INT64: 64}
_UNSIGNED_BITS = {
    Kind.UINT: 64,
    Kind.UINT8: 8,
    Kind.UINT16: 16,
    Kind.UINT32: 32,
    Kind.UINT64: 64,
}
_BASIC_KINDS = {bool: Kind.BOOL, int: Kind.INT, float: Kind.FLOAT64, str: Kind.STRING}


class BindUnmarshaler(ABC):
    """A type that builds itself from a string while binding.

    Subclasses must be constructible without arguments.
    """

    @abstractmethod
    def unmarshal_bind(self, value: str) -> None:
        """Populate this instance from `value`, raising on invalid input."""


def _truncate_signed(v: int, bits: int) -> int:
    v &= (1 << bits) - 1
    if v >= 1 << (bits - 1):
        v -= 1 << bits
    return v


def _bind_list(tp: Any, value: Any) -> Any:
    if not isinstance(value, str):
        return value
    args = typing.get_args(tp)
    elem = args[0] if args else Any
    parts = value.split(BIND_SLICE_SEP) if BIND_SLICE_SEP else list(value)
    return [_convert(elem, part) for part in parts]


def _convert(tp: Any, value: Any, kind: Kind | None = None) -> Any:
    origin = typing.get_origin(tp)

    if origin is Annotated:
        base, *extras = typing.get_args(tp)
        found = next((extra for extra in extras if isinstance(extra, Kind)), kind)
        return _convert(base, value, found)

    if isinstance(value, str) and isinstance(tp, type) and issubclass(tp, BindUnmarshaler):
        target = tp()
        target.unmarshal_bind(value)
        return target

    if origin is Union or origin is types.UnionType:
        args = typing.get_args(tp)
        inner = [arg for arg in args if arg is not type(None)]
        if len(inner) == 1 and len(inner) < len(args):
            return _convert(inner[0], value, kind)
        return value

    if kind is None and isinstance(tp, type):
        kind = _BASIC_KINDS.get(tp)

    if kind is Kind.BOOL:
        return get_bool(value)
    if kind in _SIGNED_BITS:
        return _truncate_signed(get_int64(value), _SIGNED_BITS[kind])
    if kind in _UNSIGNED_BITS:
        return get_uint64(value) & ((1 << _UNSIGNED_BITS[kind]) - 1)
    if kind is Kind.FLOAT32:
        return get_float32(get_float64(value))
    if kind is Kind.FLOAT64:
        return get_float64(value)
    if kind is Kind.STRING:
        return get_string(value)
    if origin is list or tp is list:
        return _bind_list(tp, value)
    return value


def _settable_fields(obj: Any, op: str) -> Iterator[tuple[dataclasses.Field, Any]]:
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"{op}: expected a dataclass instance, got {type(obj).__qualname__}")
    for f in dataclasses.fields(obj):
        if f.name.startswith("_"):
            continue
        tp = f.type if not isinstance(f.type, str) else Any
        yield f, tp


def bind(obj: Any, tag: str, data: dict[str, Any]) -> None:
    """Set fields of `obj` from `data`.

    With an empty `tag` keys are field names; otherwise each field is bound
    from the key named in its metadata under `tag`, and untagged fields are
    skipped.
    """
    for f, tp in _settable_fields(obj, "bind"):
        name = f.metadata.get(tag, "") if tag else f.name
        if not name or name not in data:
            continue
        setattr(obj, f.name, _convert(tp, data[name]))


def fill_struct(obj: Any, data: dict[str, Any]) -> None:
    """Set fields of `obj` from `data`, keyed by field name."""
    bind(obj, "", data)


def fill_struct_by_tag(obj: Any, tag: str, data: dict[str, Any]) -> list[str]:
    """Set the fields whose ``field`` metadata lists `tag`, keyed by field name.

    Returns the names of the fields that were set, in declaration order.
    """
    filled: list[str] = []
    for f, tp in _settable_fields(obj, "fill_struct_by_tag"):
        tags = f.metadata.get(_FIELD_TAG, "")
        if not tags or tag not in tags.split(","):
            continue
        if f.name not in data:
            continue
        setattr(obj, f.name, _convert(tp, data[f.name]))
        filled.append(f.name)
    return filled


def _is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (bool, int, float, str, bytes, bytearray, list, tuple, dict, set)):
        return not value
    return False


def set_defaults(obj: Any) -> None:
    """Fill zero-valued fields from the string in their ``default`` metadata."""
    for f, tp in _settable_fields(obj, "set_defaults"):
        default = f.metadata.get(_DEFAULT_TAG, "")
        if not default:
            continue
        if not _is_zero(getattr(obj, f.name)):
            continue
        setattr(obj, f.name, _convert(tp, default))


def is_type(value: Any, expected: type) -> bool:
    """Return True if `value` is present and exactly of type `expected`."""
    if value is None:
        return False
    return type(value) is expected