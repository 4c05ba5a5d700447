"""Tests for ZoneOrderingPolicy."""

from riderdispatch.domain.entities.zone import Zone
from riderdispatch.domain.policies.zone_ordering import (
    order_candidate_zones,
    sort_by_distance,
    split_sticky_zone,
)
from riderdispatch.domain.value_objects.zone_distance import ZoneWithDistance

# ─── Fixtures ────────────────────────────────────────────────────────

IKEJA = Zone(id="z1", name="Ikeja")
YABA = Zone(id="z2", name="Yaba")
LEKKI = Zone(id="z3", name="Lekki")


def _ranked(*pairs: tuple[Zone, int]) -> list[ZoneWithDistance]:
    return [ZoneWithDistance(zone=z, distance_meters=d) for z, d in pairs]


# ─── split_sticky_zone ───────────────────────────────────────────────


def test_split_without_zone_puts_everything_in_others():
    split = split_sticky_zone(None, [IKEJA, YABA])
    assert split.sticky is None
    assert split.others == [IKEJA, YABA]


def test_split_with_active_zone():
    split = split_sticky_zone("z2", [IKEJA, YABA, LEKKI])
    assert split.sticky == YABA
    assert split.others == [IKEJA, LEKKI]


def test_split_with_inactive_zone_has_no_sticky():
    split = split_sticky_zone("z9", [IKEJA, YABA])
    assert split.sticky is None
    assert split.others == [IKEJA, YABA]


# ─── order_candidate_zones ───────────────────────────────────────────


def test_candidates_sorted_by_distance():
    ranked = _ranked((IKEJA, 2000), (YABA, 500))
    assert order_candidate_zones(None, ranked) == [YABA, IKEJA]


def test_sticky_zone_always_first():
    """Sticky zone leads even when every other zone is closer."""
    ranked = _ranked((IKEJA, 10), (YABA, 20))
    assert order_candidate_zones(LEKKI, ranked) == [LEKKI, IKEJA, YABA]


def test_sticky_zone_not_duplicated():
    ranked = _ranked((LEKKI, 5), (IKEJA, 10))
    assert order_candidate_zones(LEKKI, ranked) == [LEKKI, IKEJA]


def test_empty_ranking_keeps_only_sticky():
    assert order_candidate_zones(LEKKI, []) == [LEKKI]
    assert order_candidate_zones(None, []) == []


def test_equal_distances_keep_input_order():
    ranked = _ranked((YABA, 100), (IKEJA, 100), (LEKKI, 50))
    assert [r.zone for r in sort_by_distance(ranked)] == [LEKKI, YABA, IKEJA]


def test_distance_km():
    assert ZoneWithDistance(zone=IKEJA, distance_meters=2500).distance_km == 2.5
