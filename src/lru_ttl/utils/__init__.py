"""Configuration helpers shared by the cache implementations."""

from .config import CacheConfig, validate_max_size, validate_ttl

__all__ = [
    "CacheConfig",
    "validate_max_size",
    "validate_ttl",
]
