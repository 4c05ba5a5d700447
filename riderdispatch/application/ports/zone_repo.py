"""Port interface for the zone directory."""

from abc import ABC, abstractmethod

from riderdispatch.domain.entities.zone import Zone


class ZoneRepository(ABC):
    @abstractmethod
    async def get_active(self) -> list[Zone]:
        ...
