from __future__ import annotations


class CacheError(Exception):
    """Base class for errors raised by lru_ttl."""


class InvalidConfig(CacheError, ValueError):
    """Raised when ``max_size`` or ``ttl`` is out of range.

    The cache that raised it keeps its previous configuration.
    """

    def __init__(self, field: str, value: object, reason: str) -> None:
        super().__init__(f"invalid {field}={value!r}: {reason}")
        self.field = field
        self.value = value
