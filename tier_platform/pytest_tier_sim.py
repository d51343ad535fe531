# pytest plugin, load with: pytest -p tier_platform.pytest_tier_sim --run-tier-sim

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("tier-sim")
    group.addoption(
        "--run-tier-sim",
        action="store_true",
        default=False,
        help="Run the tier-sim simulation instead of collecting tests.",
    )
    group.addoption(
        "--tier-sim-config",
        action="store",
        default="config/demo.yaml",
        help="YAML config with memory capacities and the process list.",
    )
    group.addoption(
        "--tier-sim-output",
        action="store",
        default="out/tier_sim",
        help="Output directory for report.yaml, summary.txt and the run log.",
    )
    group.addoption(
        "--tier-sim-gantt-width",
        action="store",
        default=None,
        help="Override the Gantt chart width from the config.",
    )


def pytest_cmdline_main(config: pytest.Config) -> Optional[int]:
    if not config.getoption("--run-tier-sim"):
        return None

    from tier_platform.simulator.case import SimulationCase

    reporter = config.pluginmanager.get_plugin("terminalreporter")

    def write_line(message: str) -> None:
        if reporter:
            reporter.write_line(message)
        else:
            print(message)

    try:
        gantt_width = _parse_width(config.getoption("--tier-sim-gantt-width"))
    except ValueError as exc:
        raise pytest.UsageError(str(exc)) from exc

    config_path = Path(config.getoption("--tier-sim-config"))
    case = SimulationCase(
        config=config_path,
        outdir=config.getoption("--tier-sim-output"),
        tag=["tier-sim-cli"],
        gantt_width=gantt_width,
    )
    write_line(f"Running tier-sim with config={config_path}")

    try:
        result = case.do_sim()
    except Exception as exc:
        write_line(f"tier-sim failed: {exc}")
        return 1

    for line in result.summary.splitlines():
        write_line(line)
    write_line(f"tier-sim report: {result.report_path}")
    write_line(f"tier-sim summary: {result.summary_path}")
    return 0


def _parse_width(raw) -> Optional[int]:
    if raw is None:
        return None
    try:
        width = int(raw)
    except ValueError as exc:
        raise ValueError(f"Gantt width must be an integer. Received: {raw!r}") from exc
    if width <= 0:
        raise ValueError(f"Gantt width must be positive. Received: {raw!r}")
    return width
