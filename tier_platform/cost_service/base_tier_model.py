from dataclasses import dataclass
from typing import Tuple

from tier_platform.base_model import HitLevel
from tier_platform.config import TierSimConfig

import logging
logger = logging.getLogger(__name__)


@dataclass
class TierStat:
    cache_count: int = 0
    page_count: int = 0
    disk_count: int = 0
    miss_count: int = 0

    @property
    def total(self):
        return self.cache_count+self.page_count+self.disk_count+self.miss_count

    def get_count(self, level: HitLevel) -> int:
        return getattr(self, f"{level.name.lower()}_count")

    def hit_rate(self, level: HitLevel):
        return self.get_count(level)/self.total if self.total > 0 else 0

    def incr(self, level: HitLevel):
        attr = f"{level.name.lower()}_count"
        setattr(self, attr, getattr(self, attr)+1)

    def __sub__(self, b: 'TierStat'):
        return TierStat(
            cache_count=self.cache_count - b.cache_count,
            page_count=self.page_count - b.page_count,
            disk_count=self.disk_count - b.disk_count,
            miss_count=self.miss_count - b.miss_count,
        )

    def __add__(self, b: 'TierStat'):
        return TierStat(
            cache_count=self.cache_count + b.cache_count,
            page_count=self.page_count + b.page_count,
            disk_count=self.disk_count + b.disk_count,
            miss_count=self.miss_count + b.miss_count,
        )


class BaseTierCostService:
    def __init__(self, config: TierSimConfig):
        self.config = config

    def access(self, address: str) -> Tuple[HitLevel, int]:
        raise NotImplementedError()

    def get_tier_stat(self) -> TierStat:
        raise NotImplementedError()
