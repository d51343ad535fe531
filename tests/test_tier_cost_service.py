import random

import pytest

from tier_model.entity.model import Tier
from tier_platform.base_model import HitLevel
from tier_platform.cost_service.base_tier_model import TierStat
from tier_platform.cost_service.tier_cost_service import TierCostService


def _check_invariants(svc: TierCostService):
    snapshot = svc.hierarchy.snapshot()
    seen = set()
    for tier, entries in snapshot.items():
        assert len(entries) == len(set(entries))
        assert not seen & set(entries), f"address in more than one tier: {seen & set(entries)}"
        seen |= set(entries)
        assert len(entries) <= svc.hierarchy.config.capacity_of(tier)


@pytest.mark.ci
def test_latency_table():
    assert HitLevel.CACHE.latency == 1
    assert HitLevel.PAGE.latency == 10
    assert HitLevel.DISK.latency == 100
    assert HitLevel.MISS.latency == 100
    assert HitLevel("not found") is HitLevel.MISS
    assert HitLevel("page") is HitLevel.PAGE
    assert HitLevel.from_tier(None) is HitLevel.MISS
    assert HitLevel.from_tier(Tier.DISK) is HitLevel.DISK


@pytest.mark.ci
def test_sequential_hits(make_config):
    svc = TierCostService(make_config(1, 2, 3))
    before = svc.hierarchy.snapshot()

    assert svc.access("A0") == (HitLevel.CACHE, 1)
    assert svc.hierarchy.snapshot() == before

    assert svc.access("A1") == (HitLevel.PAGE, 10)
    assert svc.hierarchy.snapshot() == {
        Tier.CACHE: ["A1"],
        Tier.PAGE: ["A2", "A0"],
        Tier.DISK: [],
    }
    assert svc.counter.snapshot() == {"A0": 1, "A1": 1}


@pytest.mark.ci
def test_miss_then_disk_hit(make_config):
    svc = TierCostService(make_config(1, 2, 3))

    assert svc.access("X") == (HitLevel.MISS, 100)
    assert svc.hierarchy.snapshot() == {
        Tier.CACHE: ["X"],
        Tier.PAGE: ["A2", "A0"],
        Tier.DISK: ["A1"],
    }

    assert svc.access("A1") == (HitLevel.DISK, 100)
    assert svc.hierarchy.snapshot() == {
        Tier.CACHE: ["A1"],
        Tier.PAGE: ["A0", "X"],
        Tier.DISK: ["A2"],
    }

    # promoted on the previous access
    assert svc.access("A1") == (HitLevel.CACHE, 1)


@pytest.mark.ci
def test_dropped_address_misses_again(make_config):
    svc = TierCostService(make_config(0, 0, 1))
    assert svc.hierarchy.snapshot()[Tier.DISK] == ["A0"]

    assert svc.access("B") == (HitLevel.MISS, 100)
    assert svc.hierarchy.snapshot() == {Tier.CACHE: [], Tier.PAGE: [], Tier.DISK: ["B"]}
    assert svc.hierarchy.locate("A0") is None

    assert svc.access("A0") == (HitLevel.MISS, 100)
    assert svc.access("A0") == (HitLevel.DISK, 100)


@pytest.mark.ci
def test_all_zero_capacity_never_faults(make_config):
    svc = TierCostService(make_config(0, 0, 0))
    for _ in range(3):
        assert svc.access("A0") == (HitLevel.MISS, 100)
    assert svc.hierarchy.snapshot() == {Tier.CACHE: [], Tier.PAGE: [], Tier.DISK: []}
    assert svc.counter["A0"] == 3


@pytest.mark.ci
def test_single_slot_cache_always_yields_its_resident(make_config):
    svc = TierCostService(make_config(1, 1, 4))
    # seed: cache [A0], page [A1], disk [A2, A3]
    svc.access("A0")
    svc.access("A0")
    assert svc.access("A2") == (HitLevel.DISK, 100)
    assert svc.hierarchy.locate("A2") == Tier.CACHE
    assert svc.hierarchy.locate("A0") == Tier.PAGE
    assert svc.hierarchy.locate("A1") == Tier.DISK


@pytest.mark.ci
@pytest.mark.parametrize("capacities", [
    (1, 2, 3), (0, 2, 3), (2, 0, 3), (2, 3, 0), (0, 0, 0), (3, 3, 3), (20, 40, 80),
])
def test_invariants_hold_after_every_access(make_config, capacities):
    svc = TierCostService(make_config(*capacities))
    _check_invariants(svc)

    rng = random.Random(571)
    universe = [f"A{i}" for i in range(12)] + [f"B{i}" for i in range(12)]
    previous = None
    for _ in range(400):
        address = rng.choice(universe)
        level, latency = svc.access(address)
        assert latency == level.latency
        _check_invariants(svc)
        if previous == address and svc.hierarchy.config.CACHE_CAPACITY > 0:
            assert level is HitLevel.CACHE
        previous = address


@pytest.mark.ci
def test_tier_stat_tracks_classification(make_config):
    svc = TierCostService(make_config(1, 2, 3))
    for address in ("A0", "A1", "X", "A2"):
        svc.access(address)

    stat = svc.get_tier_stat()
    assert stat == TierStat(cache_count=1, page_count=1, disk_count=1, miss_count=1)
    assert stat.total == 4
    assert stat.hit_rate(HitLevel.MISS) == 0.25

    svc.access("A2")
    assert (svc.get_tier_stat() - stat) == TierStat(cache_count=1)
    assert (stat + stat).total == 8
    assert TierStat().hit_rate(HitLevel.CACHE) == 0

    report = svc.post_stat()
    assert report["not found"]["count"] == 1
    assert set(report["tiers"]) == {"cache", "page", "disk"}
