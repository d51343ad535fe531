from dataclasses import asdict
from pathlib import Path
from typing import List, Sequence

import yaml

from tier_platform.base_model import HitLevel, PostStat, Process, ProcessStat
from tier_platform.data_visual import AbstractPostProcessor
from tier_platform.executor.process_scheduler import ProcessScheduler
from tier_platform.utils.config_utils import BaseEnum

import logging
logger = logging.getLogger(__name__)


def custom_asdict_factory(data):
    def convert(obj):
        if isinstance(obj, BaseEnum):
            return obj.name.lower()
        if isinstance(obj, dict):
            return dict((convert(k), convert(v)) for k, v in obj.items())
        if isinstance(obj, (list, tuple)):
            return [convert(v) for v in obj]
        return obj

    return {convert(k): convert(v) for k, v in data}


class PostProcessor(AbstractPostProcessor):
    def __init__(self, outdir="./", gantt_width: int = 50) -> None:
        if gantt_width <= 0:
            raise ValueError(f"gantt width must be positive, got {gantt_width}")
        self.outdir = outdir
        self.gantt_width = gantt_width

    def get_post_stat(self, scheduler: ProcessScheduler) -> PostStat:
        post_stat = PostStat(total_time=scheduler.clock)
        for process in scheduler.ordered_processes:
            for access in process.memory_accesses:
                post_stat.hit_counts[access.found_in] += 1
            post_stat.process_stats.append(ProcessStat(
                id=process.id,
                arrival_time=process.arrival_time,
                start_time=process.start_time,
                end_time=process.end_time,
                total_execution_time=process.total_execution_time,
                access_count=len(process.memory_accesses),
                average_access_time=process.average_access_time,
            ))
        return post_stat

    def format_stats(self, post_stat: PostStat) -> str:
        lines = ["Simulation Statistics:", f"Total time: {post_stat.total_time}"]

        lines.append("Hit counts:")
        for level in HitLevel:
            lines.append(f"  {level.label.capitalize()}: {post_stat.hit_counts[level]}")

        lines.append("Hit ratios:")
        for level in HitLevel:
            lines.append(f"  {level.label.capitalize()}: {post_stat.hit_ratio(level):.2f}")

        lines.append("")
        lines.append("Average access times:")
        for stat in post_stat.process_stats:
            if stat.average_access_time is None:
                lines.append(f"  Process {stat.id}: no accesses")
            else:
                lines.append(f"  Process {stat.id}: {stat.average_access_time:.2f}")
        return "\n".join(lines)

    def format_gantt(self, processes: Sequence[Process], total_time: int) -> str:
        """
        Render one bar per process in execution order.

        Column ``i`` is filled when ``start_pos <= i < end_pos`` with
        ``pos = time * width // total_time``; a zero total time leaves every
        bar blank.
        """
        width = self.gantt_width
        lines = ["Gantt Chart:"]
        for p in processes:
            if total_time > 0:
                start_pos = p.start_time*width//total_time
                end_pos = p.end_time*width//total_time
            else:
                start_pos = end_pos = 0
            bar = "".join(
                "=" if start_pos <= i < end_pos else " " for i in range(width))
            lines.append(f"P{p.id} |{bar}| {p.start_time} - {p.end_time}")
        return "\n".join(lines)

    def format_access_detail(self, processes: Sequence[Process]) -> str:
        blocks: List[str] = []
        for p in processes:
            lines = [f"Process {p.id} memory accesses:"]
            for access in p.memory_accesses:
                lines.append(
                    f"Address: {access.address}, Access time: {access.access_time}, Found in: {access.found_in.label}")
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    def render(self, scheduler: ProcessScheduler, show_detail: bool = True) -> str:
        post_stat = self.get_post_stat(scheduler)
        sections = [
            self.format_stats(post_stat),
            self.format_gantt(scheduler.ordered_processes, post_stat.total_time),
        ]
        if show_detail and scheduler.ordered_processes:
            sections.append(self.format_access_detail(scheduler.ordered_processes))
        return "\n\n".join(sections) + "\n"

    def dump_report(self, scheduler: ProcessScheduler, service_report=None) -> Path:
        post_stat = self.get_post_stat(scheduler)
        report = {
            "total_time": post_stat.total_time,
            "total_accesses": post_stat.total_accesses,
            "hit_counts": {level.label: post_stat.hit_counts[level] for level in HitLevel},
            "hit_ratios": {level.label: round(post_stat.hit_ratio(level), 6) for level in HitLevel},
            "processes": [asdict(s, dict_factory=custom_asdict_factory) for s in post_stat.process_stats],
        }
        if service_report:
            report["service_report"] = service_report

        report_path = Path(self.outdir) / "report.yaml"
        report_path.parent.mkdir(parents=True, exist_ok=True)
        with open(report_path, "w") as f:
            yaml.safe_dump(report, f, sort_keys=False)
        logger.info("report written to %s", report_path)
        return report_path
