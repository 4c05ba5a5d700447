"""Rider Dispatch — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from riderdispatch.adapters.persistence.database import engine
from riderdispatch.config import settings
from riderdispatch.infrastructure.api.routes_dispatch import router as dispatch_router
from riderdispatch.infrastructure.api.routes_health import router as health_router

logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Rider Dispatch",
        description="Assigns delivery orders to the nearest available rider",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Called by the mobile app and by backend triggers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=settings.cors_allow_headers,
    )

    app.include_router(dispatch_router)
    app.include_router(health_router, prefix="/api")

    return app


app = create_app()
