from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Tier(str, Enum):
    CACHE = "cache"
    PAGE = "page"
    DISK = "disk"

    def __repr__(self):
        return self.name


@dataclass
class TierConfig:
    CACHE_CAPACITY: int
    PAGE_CAPACITY: int
    DISK_CAPACITY: int

    def __post_init__(self):
        for name in ("CACHE_CAPACITY", "PAGE_CAPACITY", "DISK_CAPACITY"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def capacity_of(self, tier: Tier) -> int:
        return getattr(self, f"{tier.name}_CAPACITY")


__all__ = [
    "Tier",
    "TierConfig",
]
