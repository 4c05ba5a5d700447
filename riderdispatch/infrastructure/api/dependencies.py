"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from riderdispatch.adapters.distance.google_distance_matrix_adapter import (
    GoogleDistanceMatrixAdapter,
)
from riderdispatch.adapters.persistence.database import get_session
from riderdispatch.adapters.persistence.repositories import (
    SqlOrderRepository,
    SqlRiderRepository,
    SqlZoneRepository,
)
from riderdispatch.application.use_cases.assign_rider import AssignRiderUseCase
from riderdispatch.config import settings

# Singleton adapter (keeps its distance cache across requests)
_distance_adapter = GoogleDistanceMatrixAdapter(settings)


def build_assign_rider_uc(session: AsyncSession) -> AssignRiderUseCase:
    return AssignRiderUseCase(
        order_repo=SqlOrderRepository(session),
        zone_repo=SqlZoneRepository(session),
        rider_repo=SqlRiderRepository(session),
        distance=_distance_adapter,
        settings=settings,
    )


def get_assign_rider_uc(
    session: AsyncSession = Depends(get_session),
) -> AssignRiderUseCase:
    return build_assign_rider_uc(session)
