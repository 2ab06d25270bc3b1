"""Process-wide default generator.

The only global state in the package: a secure RandomGen created on first
use and guarded by a re-entrant lock. Every call forwarded through
DefaultRandomGen runs while holding that lock, so the shared instance can
be used from several threads. Private engines stay lock-free and are faster.
"""
from __future__ import annotations

from threading import RLock
from typing import Any, Callable, Optional

from bufrng.log import debug


class DefaultRandomGen:

    def __init__(self, factory: Optional[Callable[[], Any]] = None):
        self._lock = RLock()
        self._factory = factory
        self._instance = None

    def _get_instance(self):
        if self._instance is None:
            if self._factory is None:
                from bufrng.distributions import RandomGen
                self._factory = RandomGen.create_secure
            self._instance = self._factory()
            debug("Default generator initialized")
        return self._instance

    @property
    def lock(self) -> RLock:
        return self._lock

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        with self._lock:
            attr = getattr(self._get_instance(), name)
        if not callable(attr):
            return attr

        def locked(*args, **kwargs):
            with self._lock:
                return attr(*args, **kwargs)

        locked.__name__ = name
        locked.__doc__ = getattr(attr, '__doc__', None)
        return locked

    def reset(self) -> None:
        """Drop the current instance; the next call builds a fresh one."""
        with self._lock:
            self._instance = None


_default = DefaultRandomGen()


def get_default() -> DefaultRandomGen:
    return _default


__all__ = ["DefaultRandomGen", "get_default"]
