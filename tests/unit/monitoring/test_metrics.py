"""Unit tests for cache metrics."""

from lru_ttl import LRUCache, TTLCache
from lru_ttl.monitoring.metrics import (
    Counter,
    Histogram,
    lru_ttl_evictions_total,
    lru_ttl_lookups_total,
    lru_ttl_sweep_size,
)


class TestPrimitives:
    """Test Counter and Histogram."""

    def test_counter_labels(self):
        """Test counters keep one value per label set."""
        counter = Counter("c", "test counter")
        counter.inc(result="hit")
        counter.inc(2, result="hit")
        counter.inc(result="miss")

        assert counter.get(result="hit") == 3.0
        assert counter.get(result="miss") == 1.0
        assert counter.get(result="other") == 0.0

    def test_histogram_buckets(self):
        """Test observations land in the first bucket that fits."""
        hist = Histogram("h", "test histogram", buckets=[1, 5, 10])
        hist.observe(1)
        hist.observe(3)
        hist.observe(7)
        hist.observe(50)  # above every bucket, dropped

        assert hist.counts[()] == [1, 1, 1]
        assert hist.total() == 3

    def test_sweep_size_keeps_large_observations(self):
        """Test the sweep-size histogram ends with an unbounded bucket."""
        assert lru_ttl_sweep_size.buckets[-1] == float("inf")


class TestCacheMetrics:
    """Test the predefined metrics are fed by cache operations."""

    def test_lookups_counted(self):
        """Test hits and misses are recorded."""
        hits = lru_ttl_lookups_total.get(result="hit")
        misses = lru_ttl_lookups_total.get(result="miss")

        cache = LRUCache(2)
        cache.write("a", 1)
        cache.read("a")
        cache.read("b")
        cache.get_or_compute("c", lambda: 3)

        assert lru_ttl_lookups_total.get(result="hit") == hits + 1
        assert lru_ttl_lookups_total.get(result="miss") == misses + 2

    def test_ttl_cache_get_or_compute_counted_once(self):
        """Test a TTLCache miss and hit are each recorded once."""
        hits = lru_ttl_lookups_total.get(result="hit")
        misses = lru_ttl_lookups_total.get(result="miss")

        cache = TTLCache(2)
        cache.get_or_compute("a", lambda: 1)
        cache.get_or_compute("a", lambda: 1)

        assert lru_ttl_lookups_total.get(result="hit") == hits + 1
        assert lru_ttl_lookups_total.get(result="miss") == misses + 1

    def test_capacity_evictions_counted(self):
        """Test inserts over capacity and shrinking both count as capacity evictions."""
        before = lru_ttl_evictions_total.get(reason="capacity")

        cache = TTLCache(2)
        for i in range(4):
            cache.write(i, i)
        cache.set_max_size(1)

        assert lru_ttl_evictions_total.get(reason="capacity") == before + 3

    def test_ttl_evictions_counted(self, make_cache, clock):
        """Test swept entries are counted and the sweep size observed."""
        before = lru_ttl_evictions_total.get(reason="ttl")
        sweeps = lru_ttl_sweep_size.total()

        cache = make_cache(ttl=1)
        for i in range(3):
            cache.write(i, i)
        clock.advance(1)
        cache.expire()
        cache.expire()

        assert lru_ttl_evictions_total.get(reason="ttl") == before + 3
        assert lru_ttl_sweep_size.total() == sweeps + 1
