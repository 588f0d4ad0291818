from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass
class Counter:
    name: str
    help: str
    values: Dict[Tuple, float] = field(default_factory=dict)

    def inc(self, value: float = 1.0, **labels: Any) -> None:
        key = tuple(sorted(labels.items()))
        self.values[key] = self.values.get(key, 0.0) + value

    def get(self, **labels: Any) -> float:
        return self.values.get(tuple(sorted(labels.items())), 0.0)


@dataclass
class Histogram:
    """Bucketed counts of observed values.

    Each value lands in the first bucket it is ``<=``. Values above the last
    bucket are not recorded, so end ``buckets`` with ``float("inf")`` to keep
    every observation.
    """

    name: str
    help: str
    buckets: List[float]
    counts: Dict[Tuple, List[int]] = field(default_factory=dict)

    def observe(self, val: float, **labels: Any) -> None:
        key = tuple(sorted(labels.items()))
        if key not in self.counts:
            self.counts[key] = [0 for _ in self.buckets]
        for i, b in enumerate(self.buckets):
            if val <= b:
                self.counts[key][i] += 1
                break

    def total(self, **labels: Any) -> int:
        return sum(self.counts.get(tuple(sorted(labels.items())), []))


# Predefined metrics
lru_ttl_lookups_total = Counter("lru_ttl_lookups_total", "Cache lookups by result (hit/miss)")
lru_ttl_evictions_total = Counter("lru_ttl_evictions_total", "Entries removed by reason (ttl/capacity)")
lru_ttl_sweep_size = Histogram(
    "lru_ttl_sweep_size",
    "Entries removed per TTL sweep",
    buckets=[1, 5, 10, 50, 100, 500, 1000, float("inf")],
)
