from __future__ import annotations

import logging
import typing as t
from collections import OrderedDict

from lru_ttl.monitoring.metrics import lru_ttl_evictions_total, lru_ttl_lookups_total
from lru_ttl.utils.config import validate_max_size

K = t.TypeVar("K", bound=t.Hashable)
V = t.TypeVar("V")

_logger = logging.getLogger(__name__)


class LRUCache(t.Generic[K, V]):
    """Capacity-bounded mapping ordered by recency of use.

    The least recently used entry sits at the front of the underlying
    ``OrderedDict`` and is dropped whenever an insert would exceed
    ``max_size``. Iteration yields the most recently used entry first.

    Not thread safe.
    """

    def __init__(self, max_size: int) -> None:
        self._max_size = validate_max_size(max_size)
        self._data: "OrderedDict[K, V]" = OrderedDict()

    @property
    def max_size(self) -> int:
        return self._max_size

    @max_size.setter
    def max_size(self, max_size: int) -> None:
        self.set_max_size(max_size)

    def set_max_size(self, max_size: int) -> None:
        self._max_size = validate_max_size(max_size)
        evicted = 0
        while len(self._data) > self._max_size:
            self._data.popitem(last=False)
            evicted += 1
        if evicted:
            lru_ttl_evictions_total.inc(evicted, reason="capacity")
            _logger.debug("Resized to %d, evicted %d entries", self._max_size, evicted)

    def get_or_compute(self, key: K, compute_fn: t.Callable[[], V]) -> t.Tuple[V, bool]:
        """Return ``(value, hit)``, calling ``compute_fn`` once on a miss.

        A computed value is stored as the most recently used entry. If
        ``compute_fn`` raises, nothing is stored.
        """
        if key in self._data:
            self._data.move_to_end(key)
            lru_ttl_lookups_total.inc(result="hit")
            return self._data[key], True
        lru_ttl_lookups_total.inc(result="miss")
        value = compute_fn()
        self.write(key, value)
        return value, False

    def getset(self, key: K, compute_fn: t.Callable[[], V]) -> V:
        value, _ = self.get_or_compute(key, compute_fn)
        return value

    def fetch(self, key: K, default_fn: t.Optional[t.Callable[[], V]] = None) -> t.Optional[V]:
        """Look up ``key`` without storing on a miss.

        A hit marks the entry most recently used. On a miss the result of
        ``default_fn`` is returned when given, otherwise ``None``.
        """
        if key in self._data:
            self._data.move_to_end(key)
            lru_ttl_lookups_total.inc(result="hit")
            return self._data[key]
        lru_ttl_lookups_total.inc(result="miss")
        if default_fn is not None:
            return default_fn()
        return None

    def read(self, key: K) -> t.Optional[V]:
        return self.fetch(key)

    def write(self, key: K, value: V) -> V:
        self._data[key] = value
        self._data.move_to_end(key)
        if len(self._data) > self._max_size:
            # evict LRU
            evicted_key, _ = self._data.popitem(last=False)
            lru_ttl_evictions_total.inc(reason="capacity")
            _logger.debug("Evicted least recently used key %r", evicted_key)
        return value

    def contains(self, key: K) -> bool:
        return key in self._data

    def delete(self, key: K) -> t.Optional[V]:
        return self._data.pop(key, None)

    def iterate(self) -> t.Iterator[t.Tuple[K, V]]:
        # Mutating the cache while this generator is live raises RuntimeError.
        for key in reversed(self._data):
            yield key, self._data[key]

    def to_list(self) -> t.List[t.Tuple[K, V]]:
        return list(self.iterate())

    def values(self) -> t.List[V]:
        return [value for _, value in self.iterate()]

    def oldest(self) -> t.Optional[t.Tuple[K, V]]:
        """Peek at the least recently used entry without removing it."""
        for key in self._data:
            return key, self._data[key]
        return None

    def count(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        self._data.clear()

    def __getitem__(self, key: K) -> t.Optional[V]:
        return self.read(key)

    def __setitem__(self, key: K, value: V) -> None:
        self.write(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> t.Iterator[t.Tuple[K, V]]:
        return self.iterate()

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_size={self._max_size}, count={len(self._data)})"
