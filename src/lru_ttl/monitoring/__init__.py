from .metrics import Counter, Histogram, lru_ttl_evictions_total, lru_ttl_lookups_total, lru_ttl_sweep_size

__all__ = [
    "Counter",
    "Histogram",
    "lru_ttl_lookups_total",
    "lru_ttl_evictions_total",
    "lru_ttl_sweep_size",
]
