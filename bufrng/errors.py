"""Exceptions raised by the generator engine.

Argument problems use the builtin ValueError/TypeError and unsupported
operations use NotImplementedError; only the refill guard needs its own type.
"""


class RefillReentryError(RuntimeError):
    """An entropy provider called back into the engine it is currently refilling."""

    def __init__(self, message: str = "Refill reentered"):
        super().__init__(message)


__all__ = ["RefillReentryError"]
