"""Dispatch endpoints — assign a rider to an order."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from riderdispatch.adapters.persistence.database import get_session
from riderdispatch.application.use_cases.assign_rider import (
    AlreadyAccepted,
    AssignmentOutcome,
    Assigned,
    AssignRiderUseCase,
    Conflict,
    InternalError,
    NoActiveZones,
    NoRidersAvailable,
    NotFound,
    ZoneUndeterminable,
)
from riderdispatch.infrastructure.api.dependencies import get_assign_rider_uc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dispatch"])


class AssignRiderRequest(BaseModel):
    order_id: str | None = None


@router.options("/assign-rider")
async def assign_rider_preflight() -> Response:
    return Response(status_code=200)


@router.post("/assign-rider")
async def assign_rider(
    payload: AssignRiderRequest | None = None,
    assign_uc: AssignRiderUseCase = Depends(get_assign_rider_uc),
    session: AsyncSession = Depends(get_session),
):
    """Find the nearest available rider for an order and assign them."""
    order_id = (payload.order_id or "").strip() if payload else ""
    if not order_id:
        return JSONResponse(status_code=400, content={"error": "order_id is required"})

    outcome = await assign_uc.execute(order_id)

    # Zone seeding is kept even when no rider was assigned
    if isinstance(outcome, InternalError):
        await session.rollback()
    else:
        await session.commit()

    status_code, body = outcome_to_response(outcome)
    return JSONResponse(status_code=status_code, content=body)


def outcome_to_response(outcome: AssignmentOutcome) -> tuple[int, dict]:
    """Translate a dispatch outcome into an HTTP status and JSON body."""
    if isinstance(outcome, Assigned):
        return 200, {
            "success": True,
            "message": f"Rider assigned successfully from zone: {outcome.zone_name}",
            "rider_id": outcome.rider_id,
            "zone_id": outcome.zone_id,
            "zone_name": outcome.zone_name,
            "timeout_at": outcome.timeout_at.isoformat(),
        }
    if isinstance(outcome, NotFound):
        return 404, {"error": "Order not found", "details": outcome.detail}
    if isinstance(outcome, AlreadyAccepted):
        return 200, {"success": False, "message": "Order already accepted by a rider"}
    if isinstance(outcome, NoActiveZones):
        return 200, {"success": False, "message": "No active zones found in the system"}
    if isinstance(outcome, ZoneUndeterminable):
        return 200, {
            "success": False,
            "message": "Could not determine closest zone. Please check Google Maps API configuration.",
        }
    if isinstance(outcome, NoRidersAvailable):
        return 200, {
            "success": False,
            "message": "No available riders found in any zone. Order will remain pending.",
        }
    if isinstance(outcome, Conflict):
        return 409, {
            "success": False,
            "message": "Order assignment changed concurrently, retry the request",
        }
    if isinstance(outcome, InternalError):
        return 500, {"error": outcome.detail or "Internal server error"}

    logger.error("Unhandled dispatch outcome: %r", outcome)
    return 500, {"error": "Internal server error"}
