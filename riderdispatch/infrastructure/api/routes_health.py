"""Health check endpoint: can this instance dispatch right now?"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from riderdispatch.adapters.persistence.database import get_session
from riderdispatch.adapters.persistence.models import ZoneModel
from riderdispatch.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """Report store reachability, active zone count and distance oracle setup.

    ``ready`` is true only when an assignment could succeed: the store answers,
    at least one zone is active and a Google Maps key is configured.
    """
    active_zones: int | None = None
    try:
        result = await session.execute(
            select(func.count()).select_from(ZoneModel).where(ZoneModel.is_active.is_(True))
        )
        active_zones = int(result.scalar_one())
        database = "connected"
    except Exception as e:
        logger.warning("Health check could not reach the database: %s", e)
        database = f"error: {e}"

    distance_oracle = "configured" if settings.google_maps_api_key else "missing_api_key"
    ready = database == "connected" and bool(active_zones) and distance_oracle == "configured"

    return {
        "status": "ok" if ready else "degraded",
        "database": database,
        "active_zones": active_zones,
        "distance_oracle": distance_oracle,
    }
