"""Local entropy harvesting.

Mixes high-resolution timing jitter (time.perf_counter_ns), small chunks of
OS-provided entropy (os.urandom) and process-specific values through SHA-512
to produce a key, then expands that key into an arbitrary-length byte stream
in counter mode.

This is not a hardware TRNG. It is a pragmatic offline source for when the
caller wants the OS pool blended with local jitter; the plain os.urandom
provider remains the default secure source.
"""
from __future__ import annotations

import os
import time
import hashlib


def gather_local_entropy(samples: int = 64) -> bytes:
    """Mix local entropy sources and return a SHA-512 digest.

    - samples: number of timing/os samples to mix. Higher => more CPU work
      and (slightly) larger mixing surface.
    """
    if samples < 1:
        samples = 1

    h = hashlib.sha512()
    h.update(os.getpid().to_bytes(4, "little", signed=False))

    try:
        h.update(os.urandom(16))
    except NotImplementedError:
        h.update(b"urandom-missing")

    for i in range(samples):
        t = time.perf_counter_ns()
        h.update(t.to_bytes(8, "little", signed=False))
        try:
            h.update(os.urandom(4))
        except NotImplementedError:
            h.update(((t ^ i) & 0xFFFFFFFF).to_bytes(4, "little", signed=False))

    return h.digest()


def expand_key(key: bytes, length: int, counter: int = 0) -> bytes:
    """Stretch `key` to `length` bytes as SHA-512(key || counter) blocks.

    Returns the bytes; the caller advances `counter` by
    ceil(length / 64) to keep successive calls disjoint.
    """
    out = bytearray()
    while len(out) < length:
        block = hashlib.sha512(key + counter.to_bytes(8, "little", signed=False)).digest()
        out += block
        counter += 1
    return bytes(out[:length])


__all__ = ["gather_local_entropy", "expand_key"]
