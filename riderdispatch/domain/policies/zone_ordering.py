"""ZoneOrderingPolicy — build the ordered list of zones to search for a rider."""

from __future__ import annotations

from dataclasses import dataclass

from riderdispatch.domain.entities.zone import Zone
from riderdispatch.domain.value_objects.zone_distance import ZoneWithDistance


@dataclass(frozen=True)
class ZoneSplit:
    """Active zones split around the order's sticky zone."""

    sticky: Zone | None
    others: list[Zone]


def split_sticky_zone(pickup_zone_id: str | None, zones: list[Zone]) -> ZoneSplit:
    """Separate the order's current zone from the rest of the active zones.

    ``sticky`` is None when the order has no zone or its zone is no longer
    among ``zones``; in both cases every zone lands in ``others``.
    """
    if pickup_zone_id is None:
        return ZoneSplit(sticky=None, others=list(zones))

    sticky = next((z for z in zones if z.id == pickup_zone_id), None)
    others = [z for z in zones if z.id != pickup_zone_id]
    return ZoneSplit(sticky=sticky, others=others)


def sort_by_distance(ranked: list[ZoneWithDistance]) -> list[ZoneWithDistance]:
    """Ascending by distance; equal distances keep their incoming order."""
    return sorted(ranked, key=lambda r: r.distance_meters)


def order_candidate_zones(
    sticky: Zone | None,
    ranked: list[ZoneWithDistance],
) -> list[Zone]:
    """Sticky zone first (regardless of distance), then ranked zones nearest first.

    Args:
        sticky: zone already recorded on the order, if still active.
        ranked: distance ranking of the remaining zones, possibly empty.

    Returns:
        Zones in the order they should be searched, without duplicates.
    """
    candidates: list[Zone] = []
    if sticky is not None:
        candidates.append(sticky)

    for item in sort_by_distance(ranked):
        if sticky is not None and item.zone.id == sticky.id:
            continue
        candidates.append(item.zone)
    return candidates
