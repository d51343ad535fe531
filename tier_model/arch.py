from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, List, Optional

from tier_model.entity.model import Tier, TierConfig
from tier_model.entity.report import TierOccupancy
from tier_model.memory.access_counter import AccessCounter
from tier_model.memory.eviction import LeastAccessedPolicy, OldestEntryPolicy
from tier_model.memory.tier_manager import TierManager

logger = logging.getLogger(__name__)


class TieredHierarchy:
    """
    Cache -> page -> disk chain sharing a single access counter.

    Every admission enforces the target tier's capacity, so a cache eviction
    may cascade into page and from there into disk, where the oldest entry
    leaves the system. Between two public calls each tier is within its
    capacity and an address lives in at most one tier.
    """

    def __init__(self, config: TierConfig, counter: AccessCounter | None = None):
        self.config = config
        self.counter = counter if counter is not None else AccessCounter()

        self.disk = TierManager(Tier.DISK, config.DISK_CAPACITY, OldestEntryPolicy())
        self.page = TierManager(
            Tier.PAGE, config.PAGE_CAPACITY, LeastAccessedPolicy(self.counter), next_level=self.disk)
        self.cache = TierManager(
            Tier.CACHE, config.CACHE_CAPACITY, LeastAccessedPolicy(self.counter), next_level=self.page)
        self._levels = {
            Tier.CACHE: self.cache,
            Tier.PAGE: self.page,
            Tier.DISK: self.disk,
        }

    def get_manager(self, tier: Tier) -> TierManager:
        return self._levels[tier]

    def locate(self, address: str) -> Optional[Tier]:
        for tier, manager in self._levels.items():
            if address in manager:
                return tier
        return None

    def promote_to_cache(self, address: str):
        # a zero-capacity page can leave the address parked on disk
        self.page.remove(address)
        self.disk.remove(address)
        self.cache.admit(address)

    def promote_to_page(self, address: str):
        self.disk.remove(address)
        self.page.admit(address)

    def insert_new(self, address: str):
        self.disk.admit(address)

    def seed(self, prefix: str = "A"):
        """
        Fill the hierarchy with ``DISK_CAPACITY`` synthetic addresses.

        Addresses are generated as ``prefix + index`` and walk the same
        insert/promote path as a miss: the first ``CACHE_CAPACITY`` end up in
        cache, the next ``PAGE_CAPACITY`` in page, and the rest stay on disk.
        Seeding does not touch the access counter.

        The page bound is ``CACHE_CAPACITY + PAGE_CAPACITY`` so that (1, 2, 3)
        seeds cache ``[A0]`` and page ``[A1, A2]``.
        """
        cache_cap = self.config.CACHE_CAPACITY
        page_cap = self.config.PAGE_CAPACITY
        for i in range(self.config.DISK_CAPACITY):
            address = f"{prefix}{i}"
            self.insert_new(address)
            if i < cache_cap + page_cap:
                self.promote_to_page(address)
                if i < cache_cap:
                    self.promote_to_cache(address)
        logger.info("hierarchy seeded: cache=%d, page=%d, disk=%d",
                    len(self.cache), len(self.page), len(self.disk))

    def snapshot(self) -> Dict[Tier, List[str]]:
        return {tier: manager.entries() for tier, manager in self._levels.items()}

    def occupancy(self) -> List[TierOccupancy]:
        return [
            TierOccupancy(tier, manager.capacity, manager.entries())
            for tier, manager in self._levels.items()
        ]

    def stat_dict(self) -> Dict[str, Counter]:
        return {tier.name: manager.stat() for tier, manager in self._levels.items()}


__all__ = ["TieredHierarchy"]
