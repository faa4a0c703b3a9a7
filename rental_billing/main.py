"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

import rental_billing.models  # noqa: F401  registers tables on Base.metadata
from rental_billing.api.routes import (
    consumption,
    contracts,
    health,
    meters,
    payments,
    properties,
    tenants,
)
from rental_billing.core.config import settings
from rental_billing.core.database import Base, engine
from rental_billing.core.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    setup_logging(settings.LOG_LEVEL)
    # Startup: Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Rental billing: utility consumption, monthly receipts and contract settlement",
    lifespan=lifespan,
)

# Include API routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(properties.router, prefix="/api")
app.include_router(tenants.router, prefix="/api")
app.include_router(meters.router, prefix="/api")
app.include_router(payments.router, prefix="/api")
app.include_router(contracts.router, prefix="/api")
app.include_router(consumption.router, prefix="/api")


@app.get("/")
def root() -> dict[str, str]:
    """Service banner."""
    return {"message": settings.PROJECT_NAME, "version": settings.VERSION}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rental_billing.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
