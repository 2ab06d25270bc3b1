"""Well512 pseudorandom word generator.

A 16-word (512-bit) state machine producing 32-bit words. Fast and well
distributed, but not cryptographically secure.
"""
from __future__ import annotations

from typing import List, Optional

import numpy as np

from bufrng.common.seed_hash import seed_to_words

MASK32 = 0xFFFFFFFF
STATE_WORDS = 16


class Well512:

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            # imported here: the default engine module builds on distributions
            from bufrng.default import get_default
            rng = get_default()
            self._state: List[int] = [rng.uint32() for _ in range(STATE_WORDS)]
        else:
            self._state = seed_to_words(seed, STATE_WORDS)
        self._index = 0

    @property
    def state(self) -> List[int]:
        return list(self._state)

    @property
    def index(self) -> int:
        return self._index

    def next(self) -> int:
        s = self._state
        i = self._index

        a = s[i]
        c = s[(i + 13) & 15]
        b = (a ^ c ^ (a << 16) ^ (c << 15)) & MASK32
        c = s[(i + 9) & 15]
        c ^= c >> 11
        a = s[i] = b ^ c
        d = a ^ ((a << 5) & 0xDA442D20)
        i = (i + 15) & 15
        a = s[i]
        s[i] = (a ^ b ^ d ^ (a << 2) ^ (b << 18) ^ (c << 28)) & MASK32

        self._index = i
        return s[i]

    def generate(self, buffer) -> None:
        """Fill `buffer` in order with consecutive outputs.

        Accepts numpy int32/uint32 arrays (written through a uint32 view) or
        any mutable sequence of ints.
        """
        if isinstance(buffer, np.ndarray):
            words = buffer.view(np.uint32)
            words[:] = np.fromiter((self.next() for _ in range(words.size)),
                                   dtype=np.uint32, count=words.size)
        else:
            for i in range(len(buffer)):
                buffer[i] = self.next()

    __call__ = generate


__all__ = ["Well512"]
