"""Trace identifiers carried in an immutable request context mapping."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from .randutil import fast_uuid_str

__all__ = ["new", "extract", "to_context"]


class _Marker:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<trace id>"


_KEY = _Marker()


def new() -> str:
    """Return a fresh trace identifier."""
    return fast_uuid_str()


def extract(ctx: Mapping[Any, Any] | None) -> str:
    """Return the trace id stored in `ctx`, or "" if there is none."""
    if ctx is None:
        return ""
    trace_id = ctx.get(_KEY)
    return trace_id if isinstance(trace_id, str) else ""


def to_context(ctx: Mapping[Any, Any] | None, trace_id: str) -> Mapping[Any, Any]:
    """Return a new read-only context holding `trace_id`; `ctx` is left unchanged."""
    values = dict(ctx) if ctx is not None else {}
    values[_KEY] = trace_id
    return MappingProxyType(values)