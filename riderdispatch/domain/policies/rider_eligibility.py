"""RiderEligibilityPolicy — who may receive a new order."""

from __future__ import annotations

from riderdispatch.domain.entities.rider import Rider

# Hard cap on concurrently assigned/accepted orders per rider
MAX_ACTIVE_ORDERS = 10


def is_eligible(rider: Rider, max_active_orders: int = MAX_ACTIVE_ORDERS) -> bool:
    """A rider is eligible only while online and below the active-order cap."""
    return rider.is_online() and rider.active_orders < max_active_orders


def pick_least_busy(
    riders: list[Rider],
    max_active_orders: int = MAX_ACTIVE_ORDERS,
) -> Rider | None:
    """Pick the eligible rider with the fewest active orders.

    Ties are broken by rider id so the choice is deterministic.
    Returns None if nobody is eligible.
    """
    eligible = [r for r in riders if is_eligible(r, max_active_orders)]
    if not eligible:
        return None
    return min(eligible, key=lambda r: (r.active_orders, r.id))
