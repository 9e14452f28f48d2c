"""Random numbers, random strings and fast unique identifiers."""

from __future__ import annotations

import itertools
import os
import random
import threading

__all__ = [
    "LETTERS_ALPHA_NUMBER",
    "LETTERS_NUMBER",
    "LETTERS_ALPHA",
    "rand_between",
    "rand_string",
    "fast_uuid",
    "fast_uuid_str",
]

LETTERS_ALPHA_NUMBER = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
LETTERS_NUMBER = "0123456789"
LETTERS_ALPHA = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Each character is drawn from a 6-bit index, so only the first 64 are reachable.
_MAX_LETTERS = 64

_uuid_seed = os.urandom(24)
_uuid_counter = itertools.count(1)
_uuid_lock = threading.Lock()


def rand_between(low: int, high: int) -> int:
    """Return a random integer in [low, high); raise ValueError if empty."""
    return random.randrange(low, high)


def rand_string(n: int, letters: str) -> str:
    """Return `n` characters drawn at random from the first 64 of `letters`."""
    if n < 0:
        raise ValueError("negative length")
    if n == 0:
        return ""
    pool = letters[:_MAX_LETTERS]
    if not pool:
        raise ValueError("letters must not be empty")
    return "".join(random.choices(pool, k=n))


def fast_uuid() -> bytes:
    """Return a new 24-byte identifier, unique within this process."""
    with _uuid_lock:
        count = next(_uuid_counter)
    head = int.from_bytes(_uuid_seed[:8], "little") ^ (count & 0xFFFFFFFFFFFFFFFF)
    return head.to_bytes(8, "little") + _uuid_seed[8:]


def fast_uuid_str() -> str:
    """Return a new identifier as 48 lower-case hex digits."""
    return fast_uuid().hex()