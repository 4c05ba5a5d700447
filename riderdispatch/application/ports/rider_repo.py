"""Port interface for the rider directory."""

from abc import ABC, abstractmethod

from riderdispatch.domain.entities.rider import Rider


class RiderRepository(ABC):
    @abstractmethod
    async def get_available_in_zone(
        self, zone_id: str, max_active_orders: int, limit: int = 1
    ) -> list[Rider]:
        """Online riders of the zone below the active-order cap, least busy first.

        Implementations backed by a shared store should lock the returned rows
        for the rest of the transaction so concurrent searches skip them.
        """
        ...
