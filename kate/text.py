"""String helpers: case conversion, character-class checks, splitting and joining."""

from __future__ import annotations

import bisect
from typing import Any, Iterable, MutableMapping, Sequence

from .conv import get_string

__all__ = [
    "to_snake",
    "to_camel",
    "to_camel_lower",
    "is_all_numbers",
    "is_all_letters",
    "is_all_number_letters",
    "find_all_prefix_match",
    "split",
    "trim_until",
    "repeat_with_sep",
    "join_slice",
    "filter_keys",
]


def to_snake(s: str) -> str:
    """Convert camel case or dot/dash separated text to snake case.

    An upper-case letter starts a new word; a ``-`` or ``.`` ends the current
    word and the character right after it is taken into the next word as is.
    """
    words: list[str] = []
    last = 0
    chars = iter(enumerate(s))
    next(chars, None)  # the first character never starts a new word
    for i, ch in chars:
        if ch.isupper():
            words.append(s[last:i])
            last = i
        elif ch in "-.":
            words.append(s[last:i])
            last = i + 1
            next(chars, None)
    if s[last:]:
        words.append(s[last:])
    return "_".join(word.lower() for word in words)


def _snake_to_camel(s: str, upper_first: bool) -> str:
    parts = []
    for i, word in enumerate(s.split("_")):
        if (upper_first or i > 0) and word:
            parts.append(word[0].upper() + word[1:])
        else:
            parts.append(word)
    return "".join(parts)


def to_camel(s: str) -> str:
    """Convert snake case to upper camel case."""
    return _snake_to_camel(s, True)


def to_camel_lower(s: str) -> str:
    """Convert snake case to lower camel case."""
    return _snake_to_camel(s, False)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_letter(ch: str) -> bool:
    return "A" <= ch <= "Z" or "a" <= ch <= "z"


def is_all_numbers(text: str) -> bool:
    """Return True if `text` holds only ASCII digits (True for "")."""
    return all(_is_digit(ch) for ch in text)


def is_all_letters(text: str) -> bool:
    """Return True if `text` holds only ASCII letters (True for "")."""
    return all(_is_letter(ch) for ch in text)


def is_all_number_letters(text: str) -> bool:
    """Return True if `text` holds only ASCII letters and digits (True for "")."""
    return all(_is_letter(ch) or _is_digit(ch) for ch in text)


def find_all_prefix_match(items: Sequence[str], prefix: str) -> list[str]:
    """Return the items of the sorted sequence `items` that start with `prefix`."""

    def reached(i: int) -> bool:
        item = items[i]
        if len(item) < len(prefix):
            return False
        return prefix <= item[: len(prefix)]

    offset = bisect.bisect_left(range(len(items)), True, key=reached)
    result = []
    for item in items[offset:]:
        if not item.startswith(prefix):
            break
        result.append(item)
    return result


def split(text: str, sep: str) -> list[str]:
    """Split `text` on `sep`, strip the parts and drop empty ones."""
    parts = list(text) if sep == "" else text.split(sep)
    return [part.strip() for part in parts if part.strip()]


def trim_until(s: str, stop: str) -> str:
    """Drop everything up to and including the first `stop`; keep `s` if absent."""
    if not stop:
        return s[1:]
    _, found, tail = s.partition(stop)
    return tail if found else s


def repeat_with_sep(s: str, sep: str, count: int) -> str:
    """Repeat `s` `count` times with `sep` between the copies."""
    if count < 0:
        raise ValueError("negative repeat_with_sep count")
    if count == 0 and sep:
        raise ValueError("repeat_with_sep count of zero with a non-empty separator")
    return sep.join([s] * count)


def join_slice(items: Sequence[Any] | bytes | bytearray, sep: str) -> str:
    """Join the textual forms of the elements of a list, tuple or bytes."""
    if not isinstance(items, (list, tuple, bytes, bytearray)):
        raise TypeError("not slice")
    return sep.join(get_string(item) for item in items)


def filter_keys(params: MutableMapping[str, Any], filters: Iterable[str]) -> None:
    """Remove the keys in `filters` from `params` in place."""
    for key in filters:
        params.pop(key, None)