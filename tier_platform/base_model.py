from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from tier_model.entity.model import Tier
from tier_platform.utils.base_utils import BaseDataclass
from tier_platform.utils.config_utils import BaseEnum


class HitLevel(BaseEnum):
    # (found-in label, latency units)
    CACHE = ("cache", 1)
    PAGE = ("page", 10)
    DISK = ("disk", 100)
    MISS = ("not found", 100)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def latency(self) -> int:
        return self.value[1]

    @classmethod
    def _missing_(cls, value):
        for member in cls:
            if member.label == value:
                return member
        return super()._missing_(value)

    @classmethod
    def from_tier(cls, tier: Optional[Tier]) -> 'HitLevel':
        if tier is None:
            return cls.MISS
        return cls[tier.name]


@dataclass(frozen=True)
class MemoryAccessRecord:
    address: str
    found_in: HitLevel
    access_time: int


@dataclass
class Process(BaseDataclass):
    id: int
    arrival_time: int
    addresses_to_access: Tuple[str, ...]
    memory_accesses: List[MemoryAccessRecord] = field(default_factory=list)
    total_execution_time: int = 0
    start_time: Optional[int] = None
    end_time: Optional[int] = None

    @property
    def average_access_time(self) -> Optional[float]:
        if not self.memory_accesses:
            return None
        return self.total_execution_time/len(self.memory_accesses)


@dataclass
class ProcessStat(BaseDataclass):
    id: int
    arrival_time: int
    start_time: int
    end_time: int
    total_execution_time: int
    access_count: int
    average_access_time: Optional[float] = None


@dataclass
class PostStat(BaseDataclass):
    total_time: int = 0
    hit_counts: Dict[HitLevel, int] = field(
        default_factory=lambda: {level: 0 for level in HitLevel})
    process_stats: List[ProcessStat] = field(default_factory=list)

    @property
    def total_accesses(self) -> int:
        return sum(self.hit_counts.values())

    def hit_ratio(self, level: HitLevel) -> float:
        total = self.total_accesses
        return self.hit_counts[level]/total if total > 0 else 0
