"""Order entity — the dispatch-relevant slice of a delivery order."""

from dataclasses import dataclass
from datetime import datetime

from riderdispatch.domain.value_objects.enums import AssignmentStatus


@dataclass
class Order:
    id: str
    pickup_address: str
    pickup_zone_id: str | None = None
    assignment_status: AssignmentStatus = AssignmentStatus.UNASSIGNED
    assigned_rider_id: str | None = None
    assigned_at: datetime | None = None
    assignment_timeout_at: datetime | None = None

    def is_accepted(self) -> bool:
        return self.assignment_status == AssignmentStatus.ACCEPTED

    def has_zone(self) -> bool:
        return self.pickup_zone_id is not None

    def is_assignment_expired(self, now: datetime) -> bool:
        """True when a rider was assigned but did not accept before the deadline."""
        if self.assignment_status != AssignmentStatus.ASSIGNED:
            return False
        if self.assignment_timeout_at is None:
            return False
        return self.assignment_timeout_at <= now
