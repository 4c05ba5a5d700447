"""ZoneWithDistance value object — a zone paired with its travel distance."""

from dataclasses import dataclass

from riderdispatch.domain.entities.zone import Zone


@dataclass(frozen=True)
class ZoneWithDistance:
    zone: Zone
    distance_meters: int

    @property
    def distance_km(self) -> float:
        return self.distance_meters / 1000
