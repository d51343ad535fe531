from __future__ import annotations

from pathlib import Path

import pytest

from tier_platform.config import MemoryConfig, TierSimConfig


@pytest.fixture(scope="session")
def _tier_output_root(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("tier_out")


@pytest.fixture
def outdir(_tier_output_root: Path, request: pytest.FixtureRequest) -> str:
    case_dir = _tier_output_root / request.node.name
    case_dir.mkdir(parents=True, exist_ok=True)
    return str(case_dir)


@pytest.fixture(scope="session")
def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _make_config(cache: int, page: int, disk: int, **kwargs) -> TierSimConfig:
    return TierSimConfig(memory=MemoryConfig(cache, page, disk), **kwargs)


@pytest.fixture(scope="session")
def make_config():
    return _make_config
