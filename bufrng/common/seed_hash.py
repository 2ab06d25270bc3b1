"""Seed hashing helpers.

Turns a 64-bit integer seed into initial generator state by hashing its
little-endian byte representation with SHA-512 and slicing the digest into
little-endian 32-bit words.
"""
from __future__ import annotations

import hashlib
from typing import List

import numpy as np

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def seed_to_bytes(seed: int) -> bytes:
    """Return the 8-byte little-endian two's complement form of `seed`.

    Raises:
        TypeError: If seed is not an integer.
        ValueError: If seed does not fit in a signed 64-bit integer.
    """
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise TypeError(f"seed must be an integer, got {type(seed).__name__}")
    seed = int(seed)
    if not INT64_MIN <= seed <= INT64_MAX:
        raise ValueError(f"seed must fit in a signed 64-bit integer: {seed}")
    return seed.to_bytes(8, "little", signed=True)


def hash_bytes_sha512(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


def seed_to_words(seed: int, count: int = 16) -> List[int]:
    """Derive `count` unsigned 32-bit words (at most 16) from a seed.

    Args:
        seed: Signed 64-bit integer seed.
        count: Number of words to return.

    Returns:
        List of Python ints in [0, 2**32).
    """
    if not 0 <= count <= 16:
        raise ValueError("a SHA-512 digest holds at most 16 words")
    digest = hash_bytes_sha512(seed_to_bytes(seed))
    return [int(w) for w in np.frombuffer(digest, dtype="<u4", count=count)]


__all__ = ["seed_to_bytes", "hash_bytes_sha512", "seed_to_words"]
