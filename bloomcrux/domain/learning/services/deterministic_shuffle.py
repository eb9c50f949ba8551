"""
String-seeded shuffling.

The same seed yields the same order on every server and client, so a
mission's card order can be rebuilt from its seed alone. Seeds are hashed
with 32-bit FNV-1a over UTF-16 code units and drive a mulberry32 generator.
"""

from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")

_MASK = 0xFFFFFFFF
FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


def hash_seed(seed: str) -> int:
    """32-bit FNV-1a hash of ``seed``."""
    data = seed.encode("utf-16-le")
    h = FNV_OFFSET_BASIS
    for i in range(0, len(data), 2):
        h ^= int.from_bytes(data[i : i + 2], "little")
        h = _imul(h, FNV_PRIME)
    return h


def mulberry32(seed: int) -> Callable[[], float]:
    """Return a generator of floats in [0, 1) seeded by a 32-bit integer."""
    state = seed & _MASK

    def next_float() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & _MASK
        t = _imul(state ^ (state >> 15), state | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return ((t ^ (t >> 14)) & _MASK) / 4294967296

    return next_float


def seeded_shuffle(items: Sequence[T], seed: str) -> list[T]:
    """Fisher-Yates shuffle driven by ``seed``; the input is not modified."""
    rng = mulberry32(hash_seed(seed))
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(rng() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result
