"""Entropy providers.

A provider is a callable that fills the whole buffer it is handed, in place,
and keeps no reference to it afterwards. Word providers receive a numpy
int32 array; byte providers receive a bytearray.
"""
from __future__ import annotations

import os
from typing import Optional

import numpy as np

from bufrng.common.entropy import gather_local_entropy, expand_key
from bufrng.engine import ByteProvider, WordProvider
from bufrng.well512 import Well512


def secure_byte_provider(buffer: bytearray) -> None:
    """Fill `buffer` from the operating system's CSPRNG."""
    buffer[:] = os.urandom(len(buffer))


class LocalEntropyProvider:
    """Byte provider streaming SHA-512 output keyed by harvested local entropy.

    The key is re-harvested on every fill, so consecutive fills never share
    a key even though each one is expanded in counter mode.
    """

    def __init__(self, samples: int = 64):
        self.samples = samples

    def __call__(self, buffer: bytearray) -> None:
        key = gather_local_entropy(self.samples)
        buffer[:] = expand_key(key, len(buffer))


def well512_provider(seed: Optional[int] = None) -> WordProvider:
    """Return a word provider backed by a fresh Well512 instance."""
    return Well512(seed).generate


def words_from_bytes(data: bytes) -> np.ndarray:
    """View little-endian bytes as signed 32-bit words."""
    return np.frombuffer(data, dtype="<i4")


__all__ = [
    "WordProvider",
    "ByteProvider",
    "secure_byte_provider",
    "LocalEntropyProvider",
    "well512_provider",
    "words_from_bytes",
]
