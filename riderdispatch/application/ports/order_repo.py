"""Port interface for order persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from riderdispatch.domain.entities.order import Order
from riderdispatch.domain.value_objects.enums import AssignmentStatus


class OrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: str) -> Order | None:
        ...

    @abstractmethod
    async def seed_pickup_zone(self, order_id: str, zone_id: str) -> bool:
        """Record ``zone_id`` on an order that has no pickup zone yet.

        Returns False if the order already had a zone (nothing written).
        """
        ...

    @abstractmethod
    async def claim(
        self,
        order_id: str,
        *,
        expected_status: AssignmentStatus,
        expected_rider_id: str | None,
        rider_id: str,
        zone_id: str,
        assigned_at: datetime,
        timeout_at: datetime,
    ) -> bool:
        """Atomically write a rider assignment onto the order.

        The write only happens if the order's assignment_status and
        assigned_rider_id still equal the expected values (compare-and-swap).
        Returns True if the row was updated.
        """
        ...

    @abstractmethod
    async def get_expired_assignments(
        self, now: datetime, limit: int | None = None
    ) -> list[Order]:
        """Orders still ``assigned`` whose assignment_timeout_at is <= now, oldest first."""
        ...
