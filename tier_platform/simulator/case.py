import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from tier_platform.base_model import PostStat
from tier_platform.config import TierSimConfig
from tier_platform.cost_service.tier_cost_service import TierCostService
from tier_platform.data_visual.post_processor import PostProcessor
from tier_platform.executor.process_scheduler import ProcessScheduler
from tier_platform.utils.config_utils import load_config

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]


@dataclass
class SimulationResult:
    """Artifacts produced by a simulation run."""

    post_stat: PostStat
    summary: str
    report_path: Path
    summary_path: Path
    output_dir: Path


@dataclass
class SimulationCase:
    config: str | os.PathLike[str] = "config/demo.yaml"
    outdir: str | os.PathLike[str] = "./out"
    tag: List[str] = field(default_factory=lambda: ["UNKNOWN"])
    gantt_width: Optional[int] = None

    scheduler: Optional[ProcessScheduler] = None
    cost_service: Optional[TierCostService] = None

    def __repr__(self):
        cfg = Path(self.config)
        return f"{cfg.stem}[{','.join(self.tag)}]"

    def _resolve_config_path(self) -> Path:
        cfg = Path(self.config)
        candidates = [cfg] if cfg.is_absolute() else [
            Path.cwd() / cfg,
            REPO_ROOT / cfg,
            REPO_ROOT / "config" / cfg,
        ]
        for candidate in candidates:
            if candidate.is_file():
                return candidate.resolve()
        raise FileNotFoundError(
            f"config {self.config} not found, tried: {[str(c) for c in candidates]}")

    def load_config(self) -> TierSimConfig:
        config_path = self._resolve_config_path()
        logger.info("loading config %s", config_path)
        return load_config(str(config_path), TierSimConfig)

    def build(self, config: TierSimConfig) -> ProcessScheduler:
        self.cost_service = TierCostService(config)
        self.scheduler = ProcessScheduler(
            self.cost_service, show_progress=config.show_progress)
        for process_config in config.processes:
            self.scheduler.register_process(
                process_config.arrival_time, process_config.addresses)
        return self.scheduler

    def do_sim(self) -> SimulationResult:
        outdir = Path(self.outdir)
        outdir.mkdir(parents=True, exist_ok=True)
        handler = _ensure_file_logging(outdir)
        try:
            return self._run(outdir)
        finally:
            if handler is not None:
                logging.getLogger().removeHandler(handler)
                handler.close()

    def _run(self, outdir: Path) -> SimulationResult:
        config = self.load_config()
        scheduler = self.build(config)
        scheduler.run_simulation()

        gantt_width = self.gantt_width or config.report.gantt_width
        post_processor = PostProcessor(outdir=str(outdir), gantt_width=gantt_width)
        post_stat = post_processor.get_post_stat(scheduler)
        summary = post_processor.render(scheduler, show_detail=config.report.show_detail)
        report_path = post_processor.dump_report(
            scheduler, service_report=self.cost_service.post_stat())

        summary_path = outdir / "summary.txt"
        summary_path.write_text(summary, encoding="utf-8")
        logger.info("case %r done, total time %d", self, post_stat.total_time)

        return SimulationResult(
            post_stat=post_stat,
            summary=summary,
            report_path=report_path,
            summary_path=summary_path,
            output_dir=outdir,
        )


def _ensure_file_logging(outdir: Path) -> Optional[logging.FileHandler]:
    """
    Attach a file handler under the output directory to capture INFO logs.

    Returns the handler when one was added, ``None`` when the file is already
    being logged to; the caller owns and closes what it gets back.
    """
    log_path = (outdir / "tier-sim.log").resolve()
    root = logging.getLogger()
    if root.level > logging.INFO:
        root.setLevel(logging.INFO)
    # Avoid adding duplicate handlers for the same file
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_path:
            return None
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    return handler
