from collections import Counter
from dataclasses import replace
from typing import Dict, Tuple
import logging

from tier_model.arch import TieredHierarchy
from tier_model.entity.model import Tier
from tier_model.memory.access_counter import AccessCounter
from tier_platform.base_model import HitLevel
from tier_platform.config import TierSimConfig
from tier_platform.cost_service.base_tier_model import BaseTierCostService, TierStat

logger = logging.getLogger(__name__)


class TierCostService(BaseTierCostService):
    """
    Resolves one address lookup and charges its latency.

    The hierarchy is built and seeded on construction; afterwards only
    ``access`` mutates it.
    """

    def __init__(self, config: TierSimConfig):
        super().__init__(config)
        self.counter = AccessCounter()
        self.hierarchy = TieredHierarchy(
            config.memory.to_tier_config(), counter=self.counter)
        self.hierarchy.seed(config.address_prefix)
        self._tier_stat = TierStat()

    def access(self, address: str) -> Tuple[HitLevel, int]:
        # counted before classification so the address ranks with its new count
        self.counter.record(address)

        tier = self.hierarchy.locate(address)
        level = HitLevel.from_tier(tier)
        if tier == Tier.PAGE:
            self.hierarchy.promote_to_cache(address)
        elif tier == Tier.DISK:
            self.hierarchy.promote_to_page(address)
            self.hierarchy.promote_to_cache(address)
        elif tier is None:
            self.hierarchy.insert_new(address)
            self.hierarchy.promote_to_page(address)
            self.hierarchy.promote_to_cache(address)

        self._tier_stat.incr(level)
        logger.debug("tier cost service - address: %s, found_in: %s, latency: %d",
                     address, level.label, level.latency)
        return level, level.latency

    def get_tier_stat(self) -> TierStat:
        return replace(self._tier_stat)

    def get_raw_stat_dict(self) -> Dict[str, Counter]:
        return self.hierarchy.stat_dict()

    def post_stat(self) -> Dict[str, Dict]:
        stat = self.get_tier_stat()
        report = {}
        for level in HitLevel:
            report[level.label] = {
                "count": stat.get_count(level),
                "hit_rate": stat.hit_rate(level),
            }
        for tier_name, counter in self.get_raw_stat_dict().items():
            report.setdefault("tiers", {})[tier_name.lower()] = dict(counter)
        return report
