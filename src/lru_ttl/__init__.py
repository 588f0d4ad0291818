"""lru_ttl

A bounded in-process key-value cache combining least-recently-used eviction
with optional time-to-live expiration. Expiration is swept lazily at the start
of each cache operation; there are no background threads.

This package is self-contained and does not import non-stdlib dependencies.
"""

from .cache import LRUCache, TTLCache
from .errors import CacheError, InvalidConfig
from .utils import CacheConfig

__all__ = [
    "TTLCache",
    "LRUCache",
    "CacheConfig",
    "CacheError",
    "InvalidConfig",
]

__version__ = "0.1.0"
