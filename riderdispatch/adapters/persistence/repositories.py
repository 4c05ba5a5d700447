"""SQLAlchemy repository implementations."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from riderdispatch.adapters.persistence.models import OrderModel, RiderModel, ZoneModel
from riderdispatch.application.ports.order_repo import OrderRepository
from riderdispatch.application.ports.rider_repo import RiderRepository
from riderdispatch.application.ports.zone_repo import ZoneRepository
from riderdispatch.domain.entities.order import Order
from riderdispatch.domain.entities.rider import Rider
from riderdispatch.domain.entities.zone import Zone
from riderdispatch.domain.value_objects.enums import AssignmentStatus, RiderStatus

# ─── Mappers ─────────────────────────────────────────────────────────


def _zone_to_domain(m: ZoneModel) -> Zone:
    return Zone(id=m.id, name=m.name, is_active=m.is_active)


def _rider_to_domain(m: RiderModel) -> Rider:
    return Rider(
        id=m.id,
        status=m.status,
        zone_id=m.zone_id,
        active_orders=m.active_orders,
    )


def _order_to_domain(m: OrderModel) -> Order:
    return Order(
        id=m.id,
        pickup_address=m.pickup_address,
        pickup_zone_id=m.pickup_zone_id,
        assignment_status=AssignmentStatus(m.assignment_status),
        assigned_rider_id=m.assigned_rider_id,
        assigned_at=m.assigned_at,
        assignment_timeout_at=m.assignment_timeout_at,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, order_id: str) -> Order | None:
        m = await self._s.get(OrderModel, order_id)
        return _order_to_domain(m) if m else None

    async def seed_pickup_zone(self, order_id: str, zone_id: str) -> bool:
        result = await self._s.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.pickup_zone_id.is_(None))
            .values(pickup_zone_id=zone_id)
        )
        await self._s.flush()
        return result.rowcount == 1

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
        # Single UPDATE ... WHERE: the row only changes if nobody else touched
        # the assignment since it was read.
        result = await self._s.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.assignment_status == expected_status.value,
                OrderModel.assigned_rider_id.is_not_distinct_from(expected_rider_id),
            )
            .values(
                assigned_rider_id=rider_id,
                pickup_zone_id=zone_id,
                assignment_status=AssignmentStatus.ASSIGNED.value,
                assigned_at=assigned_at,
                assignment_timeout_at=timeout_at,
            )
            .execution_options(synchronize_session=False)
        )
        await self._s.flush()
        return result.rowcount == 1

    async def get_expired_assignments(
        self, now: datetime, limit: int | None = None
    ) -> list[Order]:
        stmt = (
            select(OrderModel)
            .where(
                OrderModel.assignment_status == AssignmentStatus.ASSIGNED.value,
                OrderModel.assignment_timeout_at <= now,
            )
            .order_by(OrderModel.assignment_timeout_at, OrderModel.id)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._s.execute(stmt)
        return [_order_to_domain(m) for m in result.scalars()]


class SqlZoneRepository(ZoneRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_active(self) -> list[Zone]:
        result = await self._s.execute(
            select(ZoneModel).where(ZoneModel.is_active.is_(True)).order_by(ZoneModel.name)
        )
        return [_zone_to_domain(m) for m in result.scalars()]


class SqlRiderRepository(RiderRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_available_in_zone(
        self, zone_id: str, max_active_orders: int, limit: int = 1
    ) -> list[Rider]:
        # Savepoint: a failed query only rolls back to here, so the request
        # transaction (and any zone seeding in it) stays usable for the next zone.
        # Rows stay locked until the request commits; concurrent searches in
        # the same zone skip them and take the next least-busy rider.
        async with self._s.begin_nested():
            result = await self._s.execute(
                select(RiderModel)
                .where(
                    RiderModel.status == RiderStatus.ONLINE.value,
                    RiderModel.zone_id == zone_id,
                    RiderModel.active_orders < max_active_orders,
                )
                .order_by(RiderModel.active_orders, RiderModel.id)
                .limit(limit)
                .with_for_update(skip_locked=True)
            )
            riders = [_rider_to_domain(m) for m in result.scalars()]
        return riders
