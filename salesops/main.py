"""
salesops - DSR Commission & Bonus Service

Main FastAPI application with:
- Commission calculation for single sales
- Month-to-date DSR and team commission summaries
- Rate catalog inspection
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from salesops.api import api_router
from salesops.config import settings
from salesops.db import get_db_context
from salesops.services.catalog import load_rate_catalog, seed_default_catalog

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Seeds the default rate catalog into empty rate tables
    - Loads the catalog once so misconfigured tiers are logged early
    """
    logger.info("Starting salesops...")

    async with get_db_context() as db:
        if await seed_default_catalog(db):
            logger.info("Default rate catalog created")

        catalog = await load_rate_catalog(db, settings)
        logger.info(
            f"Rate catalog: {len(catalog.product_rates)} product rates, "
            f"{len(catalog.bonus_tiers)} bonus tiers, "
            f"package mode {catalog.package_commission.mode.value}"
        )

    logger.info("salesops started successfully!")

    yield

    # Shutdown
    logger.info("Shutting down salesops...")


# Create FastAPI application
app = FastAPI(
    title="salesops",
    description="DSR Commission & Bonus Service",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
)

# Include routers
app.include_router(api_router)  # /api/* endpoints


# Root redirect
@app.get("/", include_in_schema=False)
async def root():
    """Redirect root to the API docs, or the health check in production."""
    if settings.is_production:
        return RedirectResponse(url="/api/health", status_code=302)
    return RedirectResponse(url="/docs", status_code=302)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "salesops.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.is_production,
    )
