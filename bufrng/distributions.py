"""Floating-point and distribution sampling on top of the range sampler.

Doubles carry 53 random mantissa bits and singles 24, both in [0, 1).
Ranged variants scale that value and redraw whenever rounding lands on the
exclusive end. Gaussian deviates come in pairs from one transform; the
second is cached until the next call. Factories build generators for the
configured profiles.
"""
from __future__ import annotations

import math
from typing import Optional

import numpy as np

from bufrng.log import debug, error
from bufrng.providers import LocalEntropyProvider, secure_byte_provider
from bufrng.sampler import RangeSampler
from bufrng import settings
from bufrng.settings import get_buffer_bytes
from bufrng.well512 import Well512

DOUBLE_MANTISSA = 1 << 53
DOUBLE_MASK = DOUBLE_MANTISSA - 1
DOUBLE_STEP = 1.0 / DOUBLE_MANTISSA  # exact power of two

SINGLE_MANTISSA = 1 << 24
SINGLE_MASK = SINGLE_MANTISSA - 1
SINGLE_STEP = 1.0 / SINGLE_MANTISSA


def _require_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return value


def _require_probability(probability: float) -> float:
    probability = float(probability)
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must lie within [0, 1], got {probability}")
    return probability


def _single(value: float) -> float:
    # out-of-range values become inf here and are rejected by the callers
    with np.errstate(over='ignore'):
        return float(np.float32(value))


def _require_single(name: str, value: float) -> float:
    return _require_finite(name, _single(_require_finite(name, value)))


def _require_span(start: float, exclusive_end: float) -> float:
    if not start < exclusive_end:
        raise ValueError(f"start ({start}) must be less than exclusive_end ({exclusive_end})")
    span = exclusive_end - start
    if not math.isfinite(span):
        raise ValueError(f"range [{start}, {exclusive_end}) is too wide to sample")
    return span


class RandomGen(RangeSampler):
    """Random value generator over a buffered entropy provider.

    Build one with a factory (`create_fast`, `create_secure`, ...) or directly
    from a word provider. Instances are not thread-safe.
    """

    def __init__(self, provider, buffer_size_bytes: int):
        super().__init__(provider, buffer_size_bytes)
        self._gauss_spare = math.nan

    # ------------------------------------------------------------------
    # Uniform
    # ------------------------------------------------------------------
    def uniform(self) -> float:
        """Uniform double in [0, 1) with the full 53 bits of mantissa."""
        return (self.uint64() & DOUBLE_MASK) * DOUBLE_STEP

    def uniform_start_end(self, start: float, exclusive_end: float) -> float:
        start = _require_finite("start", start)
        exclusive_end = _require_finite("exclusive_end", exclusive_end)
        span = _require_span(start, exclusive_end)

        # rounding can land exactly on exclusive_end
        result = span * self.uniform() + start
        while result >= exclusive_end:
            result = span * self.uniform() + start
        return result

    def uniform_start_length(self, start: float, length: float) -> float:
        start = _require_finite("start", start)
        length = _require_finite("length", length)
        if length <= 0:
            raise ValueError(f"length must be positive, got {length}")
        _require_finite("start + length", start + length)
        return length * self.uniform() + start

    def uniform_single(self) -> float:
        """Uniform value in [0, 1) with single precision (24 bits)."""
        return (self.uint32() & SINGLE_MASK) * SINGLE_STEP

    def uniform_single_start_end(self, start: float, exclusive_end: float) -> float:
        start = _require_single("start", start)
        exclusive_end = _require_single("exclusive_end", exclusive_end)
        span = _require_span(start, exclusive_end)

        result = _single(span * self.uniform_single() + start)
        while result >= exclusive_end:
            result = _single(span * self.uniform_single() + start)
        return result

    def uniform_single_start_length(self, start: float, length: float) -> float:
        start = _require_single("start", start)
        length = _require_single("length", length)
        if length <= 0:
            raise ValueError(f"length must be positive, got {length}")
        _require_single("start + length", start + length)
        return _single(length * self.uniform_single() + start)

    # ------------------------------------------------------------------
    # Gaussian / exponential
    # ------------------------------------------------------------------
    def _standard_gaussian(self) -> float:
        spare = self._gauss_spare
        if not math.isnan(spare):
            self._gauss_spare = math.nan
            return spare

        # 1 - uniform() lies in (0, 1], keeping the logarithm finite
        u = 1.0 - self.uniform()
        v = self.uniform()
        radius = math.sqrt(-2.0 * math.log(u))
        angle = 2.0 * math.pi * v
        self._gauss_spare = radius * math.sin(angle)
        return radius * math.cos(angle)

    def gaussian(self, mean: float = 0.0, standard_deviation: float = 1.0) -> float:
        """Normal deviate; consecutive calls share one pair of uniform draws."""
        mean = _require_finite("mean", mean)
        standard_deviation = _require_finite("standard_deviation", standard_deviation)
        if standard_deviation < 0:
            raise ValueError(f"standard_deviation must not be negative, got {standard_deviation}")
        return self._standard_gaussian() * standard_deviation + mean

    @property
    def has_gaussian_spare(self) -> bool:
        return not math.isnan(self._gauss_spare)

    def exponential(self) -> float:
        """Exponential deviate with rate 1; never negative, never infinite."""
        return -math.log(1.0 - self.uniform())

    def exponential_mean(self, mean: float) -> float:
        mean = _require_finite("mean", mean)
        if mean < 0:
            raise ValueError(f"mean must not be negative, got {mean}")
        return self.exponential() * mean

    def exponential_rate(self, rate: float) -> float:
        rate = _require_finite("rate", rate)
        if rate <= 0:
            raise ValueError(f"rate must be positive, got {rate}")
        return self.exponential() / rate

    # ------------------------------------------------------------------
    # Discrete
    # ------------------------------------------------------------------
    def boolean(self, probability: Optional[float] = None) -> bool:
        """Fair coin from the bit cache, or True with the given probability."""
        if probability is None:
            return super().boolean()
        return self.uniform() < _require_probability(probability)

    def binomial(self, n: int, probability: float) -> int:
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise TypeError("n must be an integer")
        if n < 0:
            raise ValueError(f"n must not be negative, got {n}")
        probability = _require_probability(probability)
        return sum(1 for _ in range(int(n)) if self.uniform() < probability)

    def poisson(self, mean: float) -> int:
        mean = float(mean)
        if not mean >= 0:
            raise ValueError(f"mean must not be negative, got {mean}")
        error("Poisson sampling requested but not supported")
        raise NotImplementedError("Poisson sampling is not implemented")

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def create_secure(cls) -> "RandomGen":
        """Generator backed by os.urandom."""
        size = get_buffer_bytes('secure')
        debug(f"Creating secure generator with a {size}-byte buffer")
        return cls.from_byte_provider(secure_byte_provider, size)

    @classmethod
    def create_local_entropy(cls) -> "RandomGen":
        """Generator backed by SHA-512 mixed local entropy."""
        size = get_buffer_bytes('local')
        samples = int(settings.SETTINGS.get('random', {}).get('local_entropy', {}).get('samples', 64))
        debug(f"Creating local-entropy generator with a {size}-byte buffer ({samples} samples per fill)")
        return cls.from_byte_provider(LocalEntropyProvider(samples), size)

    @classmethod
    def create_well512(cls, seed: Optional[int] = None) -> "RandomGen":
        """Generator backed by Well512; fast, reproducible when seeded, not secure."""
        size = get_buffer_bytes('fast')
        if seed is None:
            debug(f"Creating Well512 generator with a {size}-byte buffer")
        else:
            debug(f"Creating Well512 generator with a {size}-byte buffer from seed {seed}")
        return cls(Well512(seed).generate, size)

    @classmethod
    def create_fast(cls, seed: Optional[int] = None) -> "RandomGen":
        return cls.create_well512(seed)

    @classmethod
    def create(cls, seed: Optional[int] = None) -> "RandomGen":
        """General purpose generator (secure). Seeded construction is not supported."""
        if seed is not None:
            raise NotImplementedError("seeded construction is only available through create_fast(seed)")
        return cls.create_secure()

    @classmethod
    def create_profile(cls, profile: str, seed: Optional[int] = None) -> "RandomGen":
        """Build a generator by profile name: 'fast', 'secure' or 'local'."""
        if profile == 'fast':
            return cls.create_fast(seed)
        if seed is not None:
            raise NotImplementedError(f"profile '{profile}' cannot be seeded")
        if profile == 'secure':
            return cls.create_secure()
        if profile == 'local':
            return cls.create_local_entropy()
        raise ValueError(f"Unknown generator profile: {profile}. Available options: fast, secure, local")


__all__ = ["RandomGen"]
