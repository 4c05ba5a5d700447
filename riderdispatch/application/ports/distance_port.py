"""Port interface for travel-distance ranking of zones."""

from abc import ABC, abstractmethod

from riderdispatch.domain.entities.zone import Zone
from riderdispatch.domain.value_objects.zone_distance import ZoneWithDistance


class DistancePort(ABC):
    @abstractmethod
    async def rank_zones_by_distance(
        self, origin_address: str, zones: list[Zone]
    ) -> list[ZoneWithDistance]:
        """Rank zones by travel distance from the origin, nearest first.

        Zones whose distance cannot be resolved are omitted. Must never raise:
        any failure degrades to a shorter (possibly empty) list.
        """
        ...
