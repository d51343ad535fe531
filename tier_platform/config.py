from dataclasses import dataclass, field
from typing import List

from tier_model.entity.model import TierConfig


@dataclass
class MemoryConfig:
    # number of addresses each tier can hold
    CACHE_CAPACITY: int
    PAGE_CAPACITY: int
    DISK_CAPACITY: int

    def to_tier_config(self) -> TierConfig:
        return TierConfig(
            CACHE_CAPACITY=self.CACHE_CAPACITY,
            PAGE_CAPACITY=self.PAGE_CAPACITY,
            DISK_CAPACITY=self.DISK_CAPACITY,
        )


@dataclass
class ProcessConfig:
    arrival_time: int
    addresses: List[str] = field(default_factory=list)


@dataclass
class ReportConfig:
    gantt_width: int = field(default=50)
    show_detail: bool = field(default=True)


@dataclass
class TierSimConfig:
    memory: MemoryConfig
    processes: List[ProcessConfig] = field(default_factory=list)
    address_prefix: str = field(default="A")
    show_progress: bool = field(default=False)
    report: ReportConfig = field(default_factory=ReportConfig)
