"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from solarpro.api.routes import auth, dashboard, health, readings, stats
from solarpro.core.config import settings
from solarpro.core.database import Base, SessionLocal, engine
from solarpro.core.logging import configure_logging

# Import models for Base.metadata.create_all
from solarpro.models import (
    reading,  # noqa: F401
    user,  # noqa: F401
)
from solarpro.services.auth import ensure_admin_user

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    # Startup: Create database tables
    Base.metadata.create_all(bind=engine)
    if settings.ADMIN_PASSWORD:
        with SessionLocal() as db:
            ensure_admin_user(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Residential solar production and consumption dashboard API",
    lifespan=lifespan,
)

# Include API routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(auth.router, prefix="/api")
app.include_router(readings.router, prefix="/api")
app.include_router(stats.router, prefix="/api")
app.include_router(dashboard.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "solarpro.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
