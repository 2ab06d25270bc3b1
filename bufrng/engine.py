"""Buffered word engine.

Holds a fixed-size buffer of 32-bit words filled by an entropy provider and
hands them out from the highest index down to zero, so words come out in the
reverse of the order the provider wrote them. Sub-word draws (bits, bytes,
shorts) are carved out of whole words through sentinel-tagged caches: the
cache keeps the unused payload bits plus one marker bit just above them, and
is exhausted once only the marker is left.

An engine is meant for one thread at a time; see bufrng.default for the
locked process-wide instance.
"""
from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from bufrng.errors import RefillReentryError
from bufrng.log import error

WORD_BYTES = 4
MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

BIT_SENTINEL = 0x80000000
BYTE_SENTINEL = 0x01000000
SHORT_SENTINEL = 0x00010000

WordProvider = Callable[[np.ndarray], None]
ByteProvider = Callable[[bytearray], None]


def _to_signed(value: int, bits: int) -> int:
    if value >= 1 << (bits - 1):
        return value - (1 << bits)
    return value


def _check_buffer_size(buffer_size_bytes: int) -> int:
    if isinstance(buffer_size_bytes, bool) or not isinstance(buffer_size_bytes, (int, np.integer)):
        raise TypeError("buffer_size_bytes must be an integer")
    buffer_size_bytes = int(buffer_size_bytes)
    if buffer_size_bytes < 8:
        raise ValueError(f"buffer_size_bytes must be at least 8, got {buffer_size_bytes}")
    if buffer_size_bytes % WORD_BYTES != 0:
        raise ValueError(f"buffer_size_bytes must be a multiple of 4, got {buffer_size_bytes}")
    return buffer_size_bytes


class WordEngine:

    def __init__(self, provider: WordProvider, buffer_size_bytes: int):
        """Create an engine drawing from a word provider.

        Args:
            provider: Callable that fills a numpy '<i4' array completely.
            buffer_size_bytes: Buffer size; at least 8 and a multiple of 4.
        """
        buffer_size_bytes = _check_buffer_size(buffer_size_bytes)
        if provider is None or not callable(provider):
            raise TypeError("provider must be callable")

        self._provider = provider
        self._buffer = np.zeros(buffer_size_bytes // WORD_BYTES, dtype="<i4")
        self._cursor = 0
        self._refilling = False
        self._bit_cache = 0
        self._byte_cache = 0
        self._short_cache = 0

    @classmethod
    def from_byte_provider(cls, provider: ByteProvider, buffer_size_bytes: int):
        """Create an engine drawing from a byte provider.

        The provider fills a private scratch bytearray which is then copied
        into the word buffer as little-endian words.
        """
        buffer_size_bytes = _check_buffer_size(buffer_size_bytes)
        if provider is None or not callable(provider):
            raise TypeError("provider must be callable")
        scratch = bytearray(buffer_size_bytes)

        def fill_words(words: np.ndarray) -> None:
            provider(scratch)
            words[:] = np.frombuffer(scratch, dtype="<i4")

        return cls(fill_words, buffer_size_bytes)

    @property
    def buffer_size_bytes(self) -> int:
        return self._buffer.size * WORD_BYTES

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def refilling(self) -> bool:
        return self._refilling

    def _refill(self) -> None:
        if self._refilling:
            error("Entropy provider tried to refill the engine it is filling")
            raise RefillReentryError()
        try:
            self._refilling = True
            self._provider(self._buffer)
        finally:
            self._refilling = False

    def refill(self) -> None:
        """Refill the whole buffer now, discarding any unconsumed words."""
        self._refill()
        self._cursor = self._buffer.size

    def _take(self, words: int) -> int:
        # the cursor only moves once the refill succeeded
        index = self._cursor - words
        if index < 0:
            self._refill()
            index = self._buffer.size - words
        self._cursor = index
        return index

    def int32(self) -> int:
        return int(self._buffer[self._take(1)])

    def uint32(self) -> int:
        return int(self._buffer[self._take(1)]) & MASK32

    def uint64(self) -> int:
        index = self._take(2)
        high = int(self._buffer[index]) & MASK32
        low = int(self._buffer[index + 1]) & MASK32
        return (high << 32) | low

    def int64(self) -> int:
        return _to_signed(self.uint64(), 64)

    def boolean(self) -> bool:
        cache = self._bit_cache
        if cache > 1:
            self._bit_cache = cache >> 1
            return (cache & 1) != 0
        word = self.uint32()
        self._bit_cache = (word >> 1) | BIT_SENTINEL
        return (word & 1) != 0

    def byte(self) -> int:
        cache = self._byte_cache
        if cache >= 0x100:
            self._byte_cache = cache >> 8
            return cache & 0xFF
        word = self.uint32()
        self._byte_cache = (word >> 8) | BYTE_SENTINEL
        return word & 0xFF

    def sbyte(self) -> int:
        return _to_signed(self.byte(), 8)

    def uint16(self) -> int:
        cache = self._short_cache
        if cache >= 0x10000:
            self._short_cache = cache >> 16
            return cache & 0xFFFF
        word = self.uint32()
        self._short_cache = (word >> 16) | SHORT_SENTINEL
        return word & 0xFFFF

    def int16(self) -> int:
        return _to_signed(self.uint16(), 16)

    def fill_bytes(self, data, start: int = 0, count: Optional[int] = None) -> None:
        """Copy raw bytes straight from the word buffer into `data`.

        Bytes are taken from the unconsumed tail of the buffer (viewed as
        little-endian bytes), refilling as often as needed. The sub-word
        caches are neither used nor disturbed.

        Args:
            data: Writable bytes-like target (bytearray, memoryview, numpy uint8 array).
            start: First index of `data` to write.
            count: Number of bytes to write; defaults to the rest of `data`.

        Raises:
            TypeError: If `data` is read-only.
            ValueError: If the region does not lie within `data`.
        """
        if data is None:
            raise TypeError("data must be a writable bytes-like object")
        if isinstance(data, np.ndarray):
            out = data.reshape(-1).view(np.uint8)
        else:
            out = np.frombuffer(data, dtype=np.uint8)
        if not out.flags.writeable:
            raise TypeError("data must be a writable bytes-like object")

        if count is None:
            count = out.size - start
        if start < 0 or count < 0 or start + count > out.size:
            raise ValueError(f"byte range [{start}, {start}+{count}) is outside a buffer of {out.size} bytes")

        raw = self._buffer.view(np.uint8)
        byte_index = self._cursor * WORD_BYTES
        while count > byte_index:
            out[start:start + byte_index] = raw[:byte_index]
            start += byte_index
            count -= byte_index
            self._cursor = 0
            self._refill()
            byte_index = raw.size
        byte_index -= count
        out[start:start + count] = raw[byte_index:byte_index + count]
        self._cursor = byte_index // WORD_BYTES

    def random_bytes(self, count: int) -> bytes:
        data = bytearray(count)
        self.fill_bytes(data)
        return bytes(data)


__all__ = ["WordEngine", "WordProvider", "ByteProvider", "RefillReentryError"]
