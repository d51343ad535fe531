from dataclasses import dataclass, field
from typing import List

from tier_model.entity.model import Tier


@dataclass
class TierOccupancy:
    tier: Tier
    capacity: int
    entries: List[str] = field(default_factory=list)

    @property
    def used(self) -> int:
        return len(self.entries)


__all__ = ["TierOccupancy"]
