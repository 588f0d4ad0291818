from .lru_cache import LRUCache
from .ttl_cache import TTLCache

__all__ = ["LRUCache", "TTLCache"]
