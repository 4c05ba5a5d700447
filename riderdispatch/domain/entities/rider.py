"""Rider entity — a courier who picks up and delivers orders."""

from dataclasses import dataclass

from riderdispatch.domain.value_objects.enums import RiderStatus


@dataclass
class Rider:
    id: str
    status: str
    zone_id: str | None
    active_orders: int = 0

    def is_online(self) -> bool:
        return self.status == RiderStatus.ONLINE.value
