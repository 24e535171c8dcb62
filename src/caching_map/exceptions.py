"""Exception types raised by caching_map.

Errors from the delegate mapping are never wrapped; only argument
validation performed by the wrapper itself is reported through these types.
"""

from __future__ import annotations


class CachingMapError(Exception):
    """Base class for caching_map errors."""


class InvalidArgumentError(CachingMapError, ValueError):
    """A mutating operation received ``None`` as a key or value.

    Raised before the cached probe or the delegate mapping is touched.
    """

    def __init__(self, operation: str, argument: str) -> None:
        self.operation = operation
        self.argument = argument
        super().__init__(f"[{operation}] {argument} must not be None")
