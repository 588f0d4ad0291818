from __future__ import annotations

import dataclasses
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Optional

from lru_ttl.errors import InvalidConfig


def validate_max_size(max_size: Any) -> int:
    if isinstance(max_size, bool) or not isinstance(max_size, numbers.Integral):
        raise InvalidConfig("max_size", max_size, "must be an integer")
    if max_size < 1:
        raise InvalidConfig("max_size", max_size, "must be >= 1")
    return int(max_size)


def validate_ttl(ttl: Any) -> Optional[float]:
    """Return ``ttl`` as seconds, or ``None`` when expiration is disabled."""
    if ttl is None:
        return None
    if isinstance(ttl, bool) or not isinstance(ttl, numbers.Real):
        raise InvalidConfig("ttl", ttl, "must be None or a number of seconds")
    # NaN fails this comparison too
    if not ttl >= 0:
        raise InvalidConfig("ttl", ttl, "must be >= 0")
    return float(ttl)


@dataclass
class CacheConfig:
    max_size: int = 1000
    ttl_seconds: Optional[float] = None  # None disables expiration

    def __post_init__(self) -> None:
        self.max_size = validate_max_size(self.max_size)
        self.ttl_seconds = validate_ttl(self.ttl_seconds)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        for key in data:
            if key not in known:
                raise InvalidConfig(key, data[key], "unknown cache option")
        return cls(**data)
