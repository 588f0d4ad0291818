"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from lru_ttl import TTLCache


class FakeClock:
    """Manually advanced stand-in for ``time.monotonic``."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def make_cache(clock):
    """Factory for TTL caches driven by the fake clock."""

    def _make(max_size: int = 10, ttl=None) -> TTLCache:
        return TTLCache(max_size, ttl, time_fn=clock)

    return _make
