"""Uniformity statistics for bounded-integer output.

Used by the `check` command and the statistical tests: draw
`buckets * samples_per_bucket` values from `uniform_uint(buckets)`, histogram
them and compare the chi-square statistic against its expectation.
"""
from __future__ import annotations

import math
from typing import Dict, Any

import numpy as np


def histogram_uniform_ints(rng, buckets: int, samples_per_bucket: int) -> np.ndarray:
    """Return the histogram of buckets * samples_per_bucket draws over [0, buckets)."""
    total = buckets * samples_per_bucket
    draws = np.fromiter((rng.uniform_uint(buckets) for _ in range(total)), dtype=np.int64, count=total)
    return np.bincount(draws, minlength=buckets)


def chi_square(hist: np.ndarray) -> float:
    """Pearson chi-square statistic of `hist` against a flat expectation."""
    hist = np.asarray(hist, dtype=np.float64)
    expected = hist.sum() / hist.size
    return float(((hist - expected) ** 2).sum() / expected)


def uniformity_report(rng, buckets: int, samples_per_bucket: int, sigmas: float = 6.0) -> Dict[str, Any]:
    """Histogram a sampler and judge it against a normal approximation.

    The statistic has mean df = buckets - 1 and variance 2 * df; the check
    passes when it lies within `sigmas` standard deviations of the mean.
    """
    hist = histogram_uniform_ints(rng, buckets, samples_per_bucket)
    stat = chi_square(hist)
    df = buckets - 1
    spread = sigmas * math.sqrt(2 * df) if df > 0 else 0.0
    return {
        "buckets": buckets,
        "samples": int(hist.sum()),
        "chi_square": stat,
        "df": df,
        "z": (stat - df) / math.sqrt(2 * df) if df > 0 else 0.0,
        "passed": abs(stat - df) <= spread,
        "min_bucket": int(hist.min()),
        "max_bucket": int(hist.max()),
    }


__all__ = ["histogram_uniform_ints", "chi_square", "uniformity_report"]
