"""Readable stack traces and panic locations."""

from __future__ import annotations

import inspect
import linecache
import sys
from types import CodeType, FrameType, TracebackType
from typing import Iterable, Iterator

__all__ = ["get_stack", "locate_panic", "get_panic_stack"]

_DUNNO = "???"


def _function_name(code: CodeType) -> str:
    return getattr(code, "co_qualname", code.co_name)


def _source(lines: list[str], index: int) -> str:
    if index < 0 or index >= len(lines):
        return _DUNNO
    return lines[index].rstrip("\r\n").strip(" \t")


def _render(entries: Iterable[tuple[CodeType, int | None, int]]) -> str:
    parts = ["\n"]
    for code, lineno, lasti in entries:
        filename = code.co_filename
        line = lineno or 0
        parts.append(f"{filename}:{line} (0x{max(lasti, 0):x})\n")
        lines = linecache.getlines(filename)
        if not lines:
            continue
        parts.append(f"\t{_function_name(code)}: {_source(lines, line - 1)}\n")
    return "".join(parts)


def _walk_frames(frame: FrameType | None) -> Iterator[tuple[CodeType, int | None, int]]:
    while frame is not None:
        yield frame.f_code, frame.f_lineno, frame.f_lasti
        frame = frame.f_back


def _walk_traceback(tb: TracebackType) -> Iterator[tuple[CodeType, int | None, int]]:
    entries = []
    while tb is not None:
        entries.append(tb)
        tb = tb.tb_next
    for entry in reversed(entries):
        yield entry.tb_frame.f_code, entry.tb_lineno, entry.tb_lasti
    yield from _walk_frames(entries[0].tb_frame.f_back)


def _frame_at(depth: int) -> FrameType | None:
    """Return the frame `depth` levels above the caller of this helper."""
    frame = inspect.currentframe()
    frame = frame.f_back if frame is not None else None
    for _ in range(max(depth, 0)):
        if frame is None:
            break
        frame = frame.f_back
    return frame


def get_stack(calldepth: int) -> str:
    """Return a stack trace starting `calldepth` frames up (0 is this function).

    Each frame gives ``file:line (0xoffset)`` and, when the source can be
    read, a tab-indented ``function: source line``.
    """
    return _render(_walk_frames(_frame_at(calldepth)))


def locate_panic() -> str:
    """Return ``module.function:line`` of where the exception being handled was raised.

    Outside an exception handler, return the location of the caller's caller.
    """
    tb = sys.exc_info()[2]
    if tb is not None:
        while tb.tb_next is not None:
            tb = tb.tb_next
        frame, lineno = tb.tb_frame, tb.tb_lineno
    else:
        frame = _frame_at(2)
        if frame is None:
            return _DUNNO
        lineno = frame.f_lineno
    owner = inspect.getmodule(frame)
    module = owner.__name__ if owner is not None else ""
    name = _function_name(frame.f_code)
    return f"{module}.{name}:{lineno}" if module else f"{name}:{lineno}"


def get_panic_stack() -> str:
    """Return the stack of the exception being handled, innermost frame first.

    Outside an exception handler, the trace starts at the caller's caller.
    """
    tb = sys.exc_info()[2]
    if tb is not None:
        return _render(_walk_traceback(tb))
    return _render(_walk_frames(_frame_at(2)))