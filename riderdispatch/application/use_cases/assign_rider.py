"""AssignRiderUseCase — rank zones → search riders zone by zone → claim order."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Union

from riderdispatch.application.ports.distance_port import DistancePort
from riderdispatch.application.ports.order_repo import OrderRepository
from riderdispatch.application.ports.rider_repo import RiderRepository
from riderdispatch.application.ports.zone_repo import ZoneRepository
from riderdispatch.config import Settings
from riderdispatch.domain.entities.order import Order
from riderdispatch.domain.entities.zone import Zone
from riderdispatch.domain.policies.rider_eligibility import pick_least_busy
from riderdispatch.domain.policies.zone_ordering import (
    order_candidate_zones,
    split_sticky_zone,
)

logger = logging.getLogger(__name__)


# ─── Outcomes ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class NotFound:
    order_id: str
    detail: str | None = None


@dataclass(frozen=True)
class AlreadyAccepted:
    order_id: str


@dataclass(frozen=True)
class NoActiveZones:
    order_id: str


@dataclass(frozen=True)
class ZoneUndeterminable:
    order_id: str


@dataclass(frozen=True)
class Assigned:
    order_id: str
    rider_id: str
    zone_id: str
    zone_name: str
    assigned_at: datetime
    timeout_at: datetime


@dataclass(frozen=True)
class NoRidersAvailable:
    order_id: str
    zones_searched: int


@dataclass(frozen=True)
class Conflict:
    order_id: str
    detail: str


@dataclass(frozen=True)
class InternalError:
    order_id: str
    detail: str


AssignmentOutcome = Union[
    NotFound,
    AlreadyAccepted,
    NoActiveZones,
    ZoneUndeterminable,
    Assigned,
    NoRidersAvailable,
    Conflict,
    InternalError,
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AssignRiderUseCase:
    """Finds the nearest available rider for an order and claims the order for them."""

    def __init__(
        self,
        order_repo: OrderRepository,
        zone_repo: ZoneRepository,
        rider_repo: RiderRepository,
        distance: DistancePort,
        settings: Settings,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._orders = order_repo
        self._zones = zone_repo
        self._riders = rider_repo
        self._distance = distance
        self._timeout = timedelta(minutes=settings.assignment_timeout_minutes)
        self._max_active_orders = settings.max_active_orders
        self._clock = clock

    async def execute(self, order_id: str) -> AssignmentOutcome:
        """Assign a rider to a single order.

        Pipeline:
        1. Load order (guards: exists, not accepted)
        2. Load active zones
        3. Build candidate zones (sticky zone first, rest by travel distance)
        4. Search riders zone by zone, least busy first
        5. Claim the order with a conditional update
        """
        try:
            # Step 1: Load order
            order = await self._orders.get_by_id(order_id)
            if order is None:
                return NotFound(order_id=order_id)

            if order.is_accepted():
                logger.info("Order %s already accepted → skip assignment", order_id)
                return AlreadyAccepted(order_id=order_id)

            # Step 2: Active zones
            zones = await self._zones.get_active()
            if not zones:
                logger.warning("Order %s: no active zones in the system", order_id)
                return NoActiveZones(order_id=order_id)

            # Step 3: Candidate zones
            candidates = await self._candidate_zones(order, zones)
            if candidates is None:
                return ZoneUndeterminable(order_id=order_id)

            # Step 4 + 5: Rider search and claim
            return await self._search_and_claim(order, candidates)

        except Exception as e:
            logger.exception("Error assigning rider to order %s", order_id)
            return InternalError(order_id=order_id, detail=str(e))

    async def _candidate_zones(self, order: Order, zones: list[Zone]) -> list[Zone] | None:
        """Ordered zones to search, or None when the closest zone cannot be determined."""
        split = split_sticky_zone(order.pickup_zone_id, zones)

        ranked = []
        if split.others:
            ranked = await self._distance.rank_zones_by_distance(
                order.pickup_address, split.others
            )

        candidates = order_candidate_zones(split.sticky, ranked)

        if order.has_zone():
            if split.sticky is None:
                logger.warning(
                    "Order %s: zone %s is not active, searching all zones by distance",
                    order.id, order.pickup_zone_id,
                )
            elif split.others and not ranked:
                logger.warning(
                    "Order %s: distance ranking failed, trying sticky zone %s only",
                    order.id, split.sticky.name,
                )
            return candidates

        # No zone yet: the closest zone becomes the order's home zone
        if not candidates:
            logger.error("Order %s: could not determine closest zone", order.id)
            return None

        closest = candidates[0]
        seeded = await self._orders.seed_pickup_zone(order.id, closest.id)
        if seeded:
            order.pickup_zone_id = closest.id
            logger.info("Order %s: pickup zone set to closest zone %s", order.id, closest.name)
        return candidates

    async def _search_and_claim(self, order: Order, candidates: list[Zone]) -> AssignmentOutcome:
        for zone in candidates:
            logger.debug("Order %s: searching riders in zone %s (%s)", order.id, zone.name, zone.id)

            try:
                riders = await self._riders.get_available_in_zone(
                    zone.id, self._max_active_orders
                )
            except Exception:
                logger.exception("Error fetching riders for zone %s", zone.name)
                continue

            rider = pick_least_busy(riders, self._max_active_orders)
            if rider is None:
                logger.info("No available riders in zone %s, trying next zone", zone.name)
                continue

            assigned_at = self._clock()
            timeout_at = assigned_at + self._timeout
            claimed = await self._orders.claim(
                order.id,
                expected_status=order.assignment_status,
                expected_rider_id=order.assigned_rider_id,
                rider_id=rider.id,
                zone_id=zone.id,
                assigned_at=assigned_at,
                timeout_at=timeout_at,
            )
            if not claimed:
                logger.warning(
                    "Order %s: assignment changed concurrently, rider %s not assigned",
                    order.id, rider.id,
                )
                return Conflict(
                    order_id=order.id,
                    detail="Order assignment changed concurrently",
                )

            logger.info(
                "Order %s → Rider %s (zone: %s, timeout: %s)",
                order.id, rider.id, zone.name, timeout_at.isoformat(),
            )
            return Assigned(
                order_id=order.id,
                rider_id=rider.id,
                zone_id=zone.id,
                zone_name=zone.name,
                assigned_at=assigned_at,
                timeout_at=timeout_at,
            )

        logger.info("Order %s: no available riders in any of %d zones", order.id, len(candidates))
        return NoRidersAvailable(order_id=order.id, zones_searched=len(candidates))
