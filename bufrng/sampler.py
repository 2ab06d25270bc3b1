"""Unbiased bounded integers.

Every bounded draw reduces to `_uniform_max(max_result)`: pick the narrowest
raw draw (byte, short, 32-bit or 64-bit word) that covers the range, reject
draws at or above the largest multiple of the outcome count that fits in that
width, and reduce the accepted draw modulo the count. Each of the `count`
outcomes is then hit by exactly the same number of raw values.
"""
from __future__ import annotations

import numpy as np

from bufrng.engine import WordEngine

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT32_MAX = (1 << 32) - 1
UINT64_MAX = (1 << 64) - 1


def _require_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    return int(value)


def _require_count(count, upper: int) -> int:
    count = _require_int("count", count)
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count}")
    if count > upper:
        raise ValueError(f"count must be at most {upper}, got {count}")
    return count


def _require_range(start, inclusive_end, lower: int, upper: int) -> tuple:
    start = _require_int("start", start)
    inclusive_end = _require_int("inclusive_end", inclusive_end)
    if not lower <= start <= upper or not lower <= inclusive_end <= upper:
        raise ValueError(f"bounds must lie within [{lower}, {upper}]")
    if inclusive_end < start:
        raise ValueError(f"inclusive_end ({inclusive_end}) must not be less than start ({start})")
    return start, inclusive_end


def _require_start_count(start, count, lower: int, upper: int) -> tuple:
    start = _require_int("start", start)
    count = _require_int("count", count)
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count}")
    if not lower <= start <= upper:
        raise ValueError(f"start must lie within [{lower}, {upper}]")
    if start + count > upper:
        raise ValueError(f"start + count overflows: {start} + {count} > {upper}")
    return start, count


class RangeSampler(WordEngine):

    def _uniform_max(self, max_result: int) -> int:
        """Return a uniform integer in [0, max_result], 0 <= max_result < 2**64."""
        count = max_result + 1

        if max_result < 0x100:
            usable = (0x100 // count) * count
            draw = self.byte()
            while draw >= usable:
                draw = self.byte()
            return draw % count

        if max_result < 0x10000:
            usable = (0x10000 // count) * count
            draw = self.uint16()
            while draw >= usable:
                draw = self.uint16()
            return draw % count

        if max_result <= UINT32_MAX:
            if max_result == UINT32_MAX:
                return self.uint32()
            usable = ((1 << 32) // count) * count
            draw = self.uint32()
            while draw >= usable:
                draw = self.uint32()
            return draw % count

        if max_result == UINT64_MAX:
            return self.uint64()
        usable = ((1 << 64) // count) * count
        draw = self.uint64()
        while draw >= usable:
            draw = self.uint64()
        return draw % count

    def uniform_int(self, count: int) -> int:
        """Uniform int in [0, count) for a signed 32-bit count."""
        return self._uniform_max(_require_count(count, INT32_MAX) - 1)

    def uniform_int64(self, count: int) -> int:
        return self._uniform_max(_require_count(count, INT64_MAX) - 1)

    def uniform_uint(self, count: int) -> int:
        """Uniform int in [0, count); count may be 2**32 for the full word range."""
        return self._uniform_max(_require_count(count, UINT32_MAX + 1) - 1)

    def uniform_uint64(self, count: int) -> int:
        return self._uniform_max(_require_count(count, UINT64_MAX + 1) - 1)

    def uniform_int_start_end(self, start: int, inclusive_end: int) -> int:
        start, inclusive_end = _require_range(start, inclusive_end, INT32_MIN, INT32_MAX)
        return start + self._uniform_max(inclusive_end - start)

    def uniform_int64_start_end(self, start: int, inclusive_end: int) -> int:
        start, inclusive_end = _require_range(start, inclusive_end, INT64_MIN, INT64_MAX)
        return start + self._uniform_max(inclusive_end - start)

    def uniform_int_start_count(self, start: int, count: int) -> int:
        start, count = _require_start_count(start, count, INT32_MIN, INT32_MAX)
        return start + self._uniform_max(count - 1)

    def uniform_int64_start_count(self, start: int, count: int) -> int:
        start, count = _require_start_count(start, count, INT64_MIN, INT64_MAX)
        return start + self._uniform_max(count - 1)


__all__ = ["RangeSampler", "INT32_MIN", "INT32_MAX", "INT64_MIN", "INT64_MAX", "UINT32_MAX", "UINT64_MAX"]
