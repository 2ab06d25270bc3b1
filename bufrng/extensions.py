"""Helpers built on top of a generator: shuffling, hex tokens and an adapter
exposing a generator through the standard library's random.Random interface.

Every helper takes an optional generator and falls back to the locked
process-wide default when none is given.
"""
from __future__ import annotations

import random
from typing import Any, Iterable, Iterator, List, MutableSequence, Optional

from bufrng.default import get_default


def _resolve(rng):
    return get_default() if rng is None else rng


def shuffle_inplace(items: MutableSequence[Any], rng=None) -> None:
    """Fisher-Yates shuffle of `items` in place."""
    if items is None:
        raise TypeError("items must be a mutable sequence")
    rng = _resolve(rng)
    for i in range(len(items) - 1, 0, -1):
        other = rng.uniform_int64(i + 1)
        items[i], items[other] = items[other], items[i]


class ShuffleIterator:
    """One pass of a lazy Fisher-Yates shuffle.

    Holds a private working copy and the index of the next slot to settle.
    Each `__next__` picks one of the still-unsettled elements, emits it and
    moves the last unsettled element into the hole it leaves behind. Once
    exhausted it stays exhausted.
    """

    def __init__(self, items: List[Any], rng):
        self._working = items
        self._rng = rng
        self._remaining = len(items)

    def __iter__(self) -> "ShuffleIterator":
        return self

    def __next__(self) -> Any:
        if self._remaining == 0:
            raise StopIteration
        last = self._remaining - 1
        if last == 0:
            self._remaining = 0
            item = self._working[0]
            self._working = []
            return item
        other = self._rng.uniform_int64(last + 1)
        item = self._working[other]
        # no full swap needed, the tail slot is never read again
        self._working[other] = self._working[last]
        self._remaining = last
        return item

    @property
    def remaining(self) -> int:
        return self._remaining


class LazyShuffle:
    """Iterable yielding the elements of `sequence` in shuffled order.

    The source is copied each time iteration starts, so every `iter()` call
    produces a fresh, independent permutation.
    """

    def __init__(self, sequence: Iterable[Any], rng=None):
        if sequence is None:
            raise TypeError("sequence must be iterable")
        self._sequence = sequence
        self._rng = rng

    def __iter__(self) -> Iterator[Any]:
        return ShuffleIterator(list(self._sequence), _resolve(self._rng))


def shuffle(sequence: Iterable[Any], rng=None) -> LazyShuffle:
    return LazyShuffle(sequence, rng)


def hex_token(nbytes: int = 8, rng=None) -> str:
    """Return a random lowercase hex string of 2 * nbytes characters.

    Only as unpredictable as the generator it draws from.
    """
    if nbytes < 0:
        raise ValueError("nbytes must not be negative")
    return _resolve(rng).random_bytes(nbytes).hex()


class RandomGenAdapter(random.Random):
    """random.Random facade over a generator.

    random(), getrandbits() and randbytes() are served by the wrapped
    generator, so randrange(), choice(), shuffle() and friends inherit its
    bias-free integers. The generator cannot be reseeded or snapshotted
    through this interface.
    """

    def __init__(self, rng=None):
        self._rng = _resolve(rng)
        super().__init__()

    @property
    def generator(self):
        return self._rng

    def seed(self, a=None, version=2) -> None:
        if a is not None:
            raise NotImplementedError("the wrapped generator cannot be reseeded")

    def getstate(self):
        raise NotImplementedError("the wrapped generator state cannot be captured")

    def setstate(self, state) -> None:
        raise NotImplementedError("the wrapped generator state cannot be restored")

    def random(self) -> float:
        return self._rng.uniform()

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        words = (k + 31) // 32
        value = 0
        for _ in range(words):
            value = (value << 32) | self._rng.uint32()
        return value >> (words * 32 - k)

    def randbytes(self, n: int) -> bytes:
        return self._rng.random_bytes(n)


def to_system_random(rng=None) -> RandomGenAdapter:
    return RandomGenAdapter(rng)


__all__ = [
    "shuffle_inplace",
    "shuffle",
    "LazyShuffle",
    "ShuffleIterator",
    "hex_token",
    "RandomGenAdapter",
    "to_system_random",
]
