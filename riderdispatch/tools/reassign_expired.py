"""Re-run rider assignment for orders whose assignment deadline has passed.

Usage:
    python -m riderdispatch.tools.reassign_expired
    python -m riderdispatch.tools.reassign_expired --limit 50

Each order runs in its own session so one failure does not roll back the rest.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections import Counter
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from riderdispatch.adapters.persistence.database import async_session_factory, engine
from riderdispatch.adapters.persistence.repositories import SqlOrderRepository
from riderdispatch.application.use_cases.assign_rider import (
    AssignmentOutcome,
    AssignRiderUseCase,
    InternalError,
)
from riderdispatch.infrastructure.api.dependencies import build_assign_rider_uc

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def reassign_expired(
    limit: int | None = None,
    session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
    make_use_case: Callable[[AsyncSession], AssignRiderUseCase] = build_assign_rider_uc,
) -> list[AssignmentOutcome]:
    """Find expired assignments and dispatch each order again."""
    now = datetime.now(timezone.utc)
    async with session_factory() as session:
        expired = await SqlOrderRepository(session).get_expired_assignments(now, limit)

    logger.info("Found %d orders with expired assignments", len(expired))

    outcomes: list[AssignmentOutcome] = []
    for order in expired:
        async with session_factory() as session:
            outcome = await make_use_case(session).execute(order.id)
            if isinstance(outcome, InternalError):
                await session.rollback()
            else:
                await session.commit()
        logger.info("Order %s: %s", order.id, type(outcome).__name__)
        outcomes.append(outcome)

    summary = Counter(type(o).__name__ for o in outcomes)
    logger.info(
        "Sweep complete: %s",
        ", ".join(f"{name}={count}" for name, count in sorted(summary.items())) or "nothing to do",
    )
    return outcomes


async def _main(limit: int | None) -> int:
    try:
        outcomes = await reassign_expired(limit)
    finally:
        await engine.dispose()
    return 1 if any(isinstance(o, InternalError) for o in outcomes) else 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Reassign orders whose rider did not accept in time")
    parser.add_argument("--limit", type=int, default=None, help="Max orders to process")
    args = parser.parse_args()
    sys.exit(asyncio.run(_main(args.limit)))


if __name__ == "__main__":
    main()
