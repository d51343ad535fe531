from typing import List, Sequence

from tqdm import tqdm

from tier_platform.base_model import MemoryAccessRecord, Process
from tier_platform.cost_service.base_tier_model import BaseTierCostService

import logging

logger = logging.getLogger(__name__)


class ProcessScheduler:
    """
    First-come-first-served replay of registered processes.

    Processes run one after another on a single clock. Arrival time is only a
    floor on the start time: a process never starts before the previous one
    (in arrival order) has finished, and two processes never interleave.
    """

    def __init__(self, cost_service: BaseTierCostService, show_progress: bool = False):
        self.cost_service = cost_service
        self.show_progress = show_progress
        self.clock = 0
        self.processes: List[Process] = []
        self.ordered_processes: List[Process] = []
        self._has_run = False

    def register_process(self, arrival_time: int, addresses: Sequence[str]) -> int:
        if self._has_run:
            raise RuntimeError("cannot register a process after the simulation has run")
        if isinstance(arrival_time, bool) or not isinstance(arrival_time, int):
            raise ValueError(f"arrival time must be an integer, got {arrival_time!r}")
        if arrival_time < 0:
            raise ValueError(f"arrival time must be non-negative, got {arrival_time}")

        process = Process(
            id=len(self.processes)+1,
            arrival_time=arrival_time,
            addresses_to_access=tuple(addresses),
        )
        if not process.addresses_to_access:
            logger.warning("process %d has no addresses to access", process.id)
        self.processes.append(process)
        return process.id

    def run_simulation(self) -> int:
        if self._has_run:
            raise RuntimeError("run_simulation() can only be called once")
        self._has_run = True

        # sorted() is stable, equal arrivals keep registration order
        self.ordered_processes = sorted(
            self.processes, key=lambda p: p.arrival_time)

        pbar = tqdm(self.ordered_processes, desc="processes", unit="proc",
                    leave=False, disable=not self.show_progress)
        for process in pbar:
            self._run_process(process)

        logger.info("simulation finished: %d processes, total time %d",
                    len(self.processes), self.clock)
        return self.clock

    def _run_process(self, process: Process):
        if self.clock < process.arrival_time:
            self.clock = process.arrival_time
        process.start_time = self.clock

        for address in process.addresses_to_access:
            level, latency = self.cost_service.access(address)
            process.memory_accesses.append(
                MemoryAccessRecord(address, level, latency))
            process.total_execution_time += latency
            self.clock += latency

        process.end_time = self.clock
        logger.debug("process %d: start=%d, end=%d, accesses=%d",
                     process.id, process.start_time, process.end_time, len(process.memory_accesses))
