import numpy as np
import pytest

from bufrng.distributions import RandomGen


class DummyProvider:
    """Word provider replaying fixed words in draw order.

    The engine drains its buffer from the end, so the words are stored
    reversed. With repeat=False a second refill fails loudly.
    """

    def __init__(self, *words, repeat=False):
        self.words = [w & 0xFFFFFFFF for w in reversed(words)]
        self.repeat = repeat
        self.calls = 0

    def __call__(self, buffer):
        if self.calls and not self.repeat:
            raise RuntimeError("Read beyond end of dummy provider")
        assert buffer.size == len(self.words)
        buffer.view(np.uint32)[:] = self.words
        self.calls += 1


class CountingProvider:
    """Wraps a provider and counts how often the engine refills."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = 0

    def __call__(self, buffer):
        self.calls += 1
        self.inner(buffer)


@pytest.fixture
def make_rng():
    """Build a RandomGen whose draws are exactly the given 32-bit words."""
    def _make(*words, repeat=False):
        provider = DummyProvider(*words, repeat=repeat)
        return RandomGen(provider, 4 * len(words)), provider
    return _make
