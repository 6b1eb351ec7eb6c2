"""API router aggregation."""

from fastapi import APIRouter

from salesops.api.commission import router as commission_router
from salesops.api.health import router as health_router

# Main API router (for /api/* endpoints)
api_router = APIRouter(prefix="/api")

# Include API sub-routers
api_router.include_router(health_router)
api_router.include_router(commission_router)

__all__ = ["api_router"]
