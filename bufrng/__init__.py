"""Buffered random value engine.

Bias-free integers, floats and distribution samples drawn from a pluggable
entropy provider through a fixed-size word buffer.
"""
from bufrng.errors import RefillReentryError
from bufrng.engine import WordEngine
from bufrng.sampler import RangeSampler
from bufrng.distributions import RandomGen
from bufrng.well512 import Well512
from bufrng.default import DefaultRandomGen, get_default
from bufrng.extensions import (
    shuffle_inplace,
    shuffle,
    LazyShuffle,
    hex_token,
    RandomGenAdapter,
    to_system_random,
)

__version__ = "0.1.0"

__all__ = [
    "RefillReentryError",
    "WordEngine",
    "RangeSampler",
    "RandomGen",
    "Well512",
    "DefaultRandomGen",
    "get_default",
    "shuffle_inplace",
    "shuffle",
    "LazyShuffle",
    "hex_token",
    "RandomGenAdapter",
    "to_system_random",
]
