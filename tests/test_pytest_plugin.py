from __future__ import annotations

import os
from pathlib import Path

pytest_plugins = ("pytester",)


def _set_pythonpath(monkeypatch, repo_root: Path):
    prev_path = os.environ.get("PYTHONPATH")
    path_value = str(repo_root)
    if prev_path:
        path_value = f"{path_value}{os.pathsep}{prev_path}"
    monkeypatch.setenv("PYTHONPATH", path_value)


def test_pytest_cli_runs_simulation(pytester, monkeypatch):
    repo_root = Path(__file__).resolve().parents[1]
    output_root = pytester.path / "tier-sim-out"
    _set_pythonpath(monkeypatch, repo_root)

    result = pytester.runpytest_subprocess(
        "-p",
        "tier_platform.pytest_tier_sim",
        "--run-tier-sim",
        "--tier-sim-config",
        str(repo_root / "config" / "small.yaml"),
        "--tier-sim-output",
        str(output_root),
        "--tier-sim-gantt-width",
        "10",
    )

    assert result.ret == 0
    result.stdout.fnmatch_lines(
        [
            "*Running tier-sim*",
            "*Total time: 105*",
            "*tier-sim report:*",
            "*tier-sim summary:*",
        ]
    )
    assert (output_root / "report.yaml").exists()
    assert (output_root / "summary.txt").exists()


def test_pytest_cli_reports_missing_config(pytester, monkeypatch):
    repo_root = Path(__file__).resolve().parents[1]
    _set_pythonpath(monkeypatch, repo_root)

    result = pytester.runpytest_subprocess(
        "-p",
        "tier_platform.pytest_tier_sim",
        "--run-tier-sim",
        "--tier-sim-config",
        str(pytester.path / "missing.yaml"),
        "--tier-sim-output",
        str(pytester.path / "out"),
    )

    assert result.ret == 1
    result.stdout.fnmatch_lines(["*tier-sim failed:*"])
