from __future__ import annotations

import logging
from collections import Counter, OrderedDict
from typing import Iterator, List

from tier_model.entity.model import Tier
from tier_model.memory import AbstractMemoryManager
from tier_model.memory.eviction import EvictionPolicy

logger = logging.getLogger(__name__)


class _TierSet:
    def __init__(self, capacity: int):
        self._capacity = capacity
        self._lines: OrderedDict[str, None] = OrderedDict()

    @property
    def capacity(self) -> int:
        return self._capacity

    def is_full(self) -> bool:
        return len(self._lines) >= self._capacity

    def append(self, address: str):
        self._lines[address] = None

    def discard(self, address: str) -> bool:
        if address in self._lines:
            del self._lines[address]
            return True
        return False

    def entries(self) -> List[str]:
        return list(self._lines)

    def __contains__(self, address) -> bool:
        return address in self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)


class TierManager(AbstractMemoryManager):
    def __init__(self, tier: Tier, capacity: int, policy: EvictionPolicy, next_level: TierManager | None = None):
        super().__init__(tier, capacity, next_level=next_level)
        self.policy = policy
        self._lines = _TierSet(capacity)
        self._stat = Counter()

    def admit(self, address: str):
        if self._lines.capacity == 0:
            # nothing can live here, pass the address itself down
            self._stat["bypasses"] += 1
            self._spill(address)
            return

        if self._lines.is_full():
            victim = self.policy.choose_victim(self._lines.entries())
            self._lines.discard(victim)
            self._stat["evictions"] += 1
            logger.debug("%s: evict %s (%s)", self.tier.name, victim, self.policy.name)
            self._spill(victim)

        self._lines.append(address)
        self._stat["admits"] += 1

    def _spill(self, address: str):
        if self.next_level is not None:
            self.next_level.admit(address)
        else:
            self._stat["drops"] += 1
            logger.debug("%s: drop %s", self.tier.name, address)

    def remove(self, address: str) -> bool:
        return self._lines.discard(address)

    def entries(self) -> List[str]:
        return self._lines.entries()

    def __contains__(self, address) -> bool:
        return address in self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def stat(self) -> Counter:
        return Counter(self._stat)


__all__ = ["TierManager"]
