"""Binary search for the first or last index satisfying a monotone predicate."""

from __future__ import annotations

import bisect
from typing import Callable

__all__ = ["find_first", "find_last"]


def find_first(n: int, pred: Callable[[int], bool]) -> int:
    """Return the smallest index in [0, n) where `pred` is true, or `n`.

    `pred` must be false then true over the range.
    """
    return bisect.bisect_left(range(n), True, key=pred)


def find_last(n: int, pred: Callable[[int], bool]) -> int:
    """Return the largest index in [0, n) where `pred` is true, or -1.

    `pred` must be true then false over the range.
    """
    offset = bisect.bisect_left(range(n), True, key=lambda i: pred(n - i - 1))
    return n - offset - 1