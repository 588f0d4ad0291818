"""LRU cache with optional time-to-live expiration.

Two indices describe the same key set:

* the recency store (:class:`LRUCache`), which holds the values and enforces
  ``max_size`` by dropping its least recently used entry;
* the expiry index, an ``OrderedDict`` of key -> last touch time. A touch
  always moves the key to the end, so the index stays sorted by time and the
  expired keys are always a prefix of it.

Expiration is lazy: every public operation except :meth:`TTLCache.count` and
:meth:`TTLCache.clear` first sweeps that prefix. There is no timer thread.

Touch policy: writes and :meth:`TTLCache.get_or_compute` (hit or miss)
restart an entry's TTL clock. ``fetch``/``read`` promote recency but leave the
TTL clock alone, so expiry measures time since the value was last written or
filled.
"""

from __future__ import annotations

import logging
import time
import typing as t
from collections import OrderedDict

from lru_ttl.monitoring.metrics import lru_ttl_evictions_total, lru_ttl_lookups_total, lru_ttl_sweep_size
from lru_ttl.utils.config import CacheConfig, validate_max_size, validate_ttl

from .lru_cache import LRUCache

K = t.TypeVar("K", bound=t.Hashable)
V = t.TypeVar("V")

_logger = logging.getLogger(__name__)


class TTLCache(t.Generic[K, V]):
    """Bounded LRU cache whose entries also expire ``ttl`` seconds after their last touch.

    ``ttl=None`` disables expiration. ``time_fn`` must be non-decreasing;
    it defaults to :func:`time.monotonic`.

    Not thread safe, and mutating the cache while iterating it is undefined.
    """

    def __init__(
        self,
        max_size: int,
        ttl: t.Optional[float] = None,
        *,
        time_fn: t.Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_size = validate_max_size(max_size)
        self._ttl = validate_ttl(ttl)
        self._time_fn = time_fn
        self._touched: "OrderedDict[K, float]" = OrderedDict()
        self._store: LRUCache[K, V] = LRUCache(self._max_size)

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        *,
        time_fn: t.Callable[[], float] = time.monotonic,
    ) -> "TTLCache[K, V]":
        return cls(config.max_size, config.ttl_seconds, time_fn=time_fn)

    # Configuration

    @property
    def max_size(self) -> int:
        return self._max_size

    @max_size.setter
    def max_size(self, max_size: int) -> None:
        self.set_max_size(max_size)

    def set_max_size(self, max_size: int) -> None:
        max_size = validate_max_size(max_size)
        self._ttl_evict()
        self._max_size = max_size
        self._store.set_max_size(max_size)
        self._reconcile()

    @property
    def ttl(self) -> t.Optional[float]:
        return self._ttl

    @ttl.setter
    def ttl(self, ttl: t.Optional[float]) -> None:
        self.set_ttl(ttl)

    def set_ttl(self, ttl: t.Optional[float]) -> None:
        self._ttl = validate_ttl(ttl)
        _logger.debug("TTL set to %s", self._ttl)
        self._ttl_evict()

    # Reads and writes

    def get_or_compute(self, key: K, compute_fn: t.Callable[[], V]) -> t.Tuple[V, bool]:
        """Return ``(value, hit)`` for ``key``, computing and storing it on a miss.

        Both hits and misses restart the entry's TTL clock. An exception from
        ``compute_fn`` propagates and leaves the cache untouched.
        """
        self._ttl_evict()

        if self._store.contains(key):
            value, hit = self._store.get_or_compute(key, compute_fn)
            self._touch(key)
            return value, hit

        lru_ttl_lookups_total.inc(result="miss")
        try:
            value = compute_fn()
        except Exception:
            _logger.debug("compute_fn failed for key %r, nothing stored", key)
            raise
        # compute_fn may have written to this cache, so pick the victim only now
        victim = self._pending_victim(key)
        self._store.write(key, value)
        self._touch(key)
        self._forget_if_evicted(victim)
        return value, False

    def getset(self, key: K, compute_fn: t.Callable[[], V]) -> V:
        value, _ = self.get_or_compute(key, compute_fn)
        return value

    def fetch(self, key: K, default_fn: t.Optional[t.Callable[[], V]] = None) -> t.Optional[V]:
        """Return the live value for ``key``; on a miss, ``default_fn()`` or ``None``.

        Nothing is stored on a miss.
        """
        self._ttl_evict()
        return self._store.fetch(key, default_fn)

    def read(self, key: K) -> t.Optional[V]:
        self._ttl_evict()
        return self._store.read(key)

    def write(self, key: K, value: V) -> V:
        self._ttl_evict()

        victim = self._pending_victim(key)
        self._store.write(key, value)
        self._touch(key)
        self._forget_if_evicted(victim)
        return value

    def delete(self, key: K) -> t.Optional[V]:
        """Remove ``key`` and return its value, or ``None`` if it was absent."""
        self._ttl_evict()

        self._touched.pop(key, None)
        return self._store.delete(key)

    evict = delete

    def contains(self, key: K) -> bool:
        self._ttl_evict()
        return self._store.contains(key)

    # Bulk access

    def iterate(self) -> t.Iterator[t.Tuple[K, V]]:
        """Sweep, then lazily yield ``(key, value)`` pairs, most recently used first."""
        self._ttl_evict()
        return self._store.iterate()

    # used by callers that do their own locking around iteration
    each_unsafe = iterate

    def to_list(self) -> t.List[t.Tuple[K, V]]:
        self._ttl_evict()
        return self._store.to_list()

    def values(self) -> t.List[V]:
        self._ttl_evict()
        return self._store.values()

    def clear(self) -> None:
        self._store.clear()
        self._touched.clear()

    def expire(self) -> int:
        """Run the TTL sweep now and return how many entries it removed."""
        return self._ttl_evict()

    def count(self) -> int:
        return self._store.count()

    # Mapping-style sugar

    def __getitem__(self, key: K) -> t.Optional[V]:
        return self.read(key)

    def __setitem__(self, key: K, value: V) -> None:
        self.write(key, value)

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def __iter__(self) -> t.Iterator[t.Tuple[K, V]]:
        return self.iterate()

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_size={self._max_size}, ttl={self._ttl}, count={self.count()})"

    # Internals

    def _touch(self, key: K) -> None:
        # delete-then-insert keeps the index ordered by touch time
        self._touched.pop(key, None)
        self._touched[key] = self._time_fn()

    def _pending_victim(self, key: K) -> t.Optional[K]:
        """Key the store will drop if ``key`` is inserted now, if any."""
        if self._store.contains(key) or self._store.count() < self._max_size:
            return None
        oldest = self._store.oldest()
        return oldest[0] if oldest is not None else None

    def _forget_if_evicted(self, victim: t.Optional[K]) -> None:
        if victim is not None and not self._store.contains(victim):
            self._touched.pop(victim, None)

    def _reconcile(self) -> None:
        for key in [k for k in self._touched if not self._store.contains(k)]:
            del self._touched[key]

    def _ttl_evict(self) -> int:
        if self._ttl is None:
            return 0

        horizon = self._time_fn() - self._ttl
        removed = 0
        while self._touched:
            key, touched_at = next(iter(self._touched.items()))
            if touched_at > horizon:
                break
            del self._touched[key]
            self._store.delete(key)
            removed += 1

        if removed:
            lru_ttl_evictions_total.inc(removed, reason="ttl")
            lru_ttl_sweep_size.observe(removed)
            _logger.debug("Expired %d entries older than horizon %.3f", removed, horizon)
        return removed

    def _is_valid(self) -> bool:
        """Check that both indices hold the same keys and touch times are ordered."""
        if len(self._touched) != self._store.count():
            return False
        if any(not self._store.contains(key) for key in self._touched):
            return False
        times = list(self._touched.values())
        return all(a <= b for a, b in zip(times, times[1:]))
