"""
Health check endpoints.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from salesops.db import get_db
from salesops.models import CommissionRate, DSRBonusTier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """Basic health check. Returns 200 if the service is running."""
    return {"status": "healthy", "service": "salesops"}


@router.get("/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """
    Readiness check.

    Ready means the database answers and the rate catalog has at least one
    active commission rate, so calculations have something to value against.
    """
    try:
        await db.execute(text("SELECT 1"))
        active_rates = await db.scalar(
            select(func.count())
            .select_from(CommissionRate)
            .where(CommissionRate.is_active == True)
        )
        bonus_tiers = await db.scalar(
            select(func.count()).select_from(DSRBonusTier)
        )
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        return {
            "status": "not_ready",
            "database": f"error: {str(e)}",
        }

    return {
        "status": "ready" if active_rates else "not_ready",
        "database": "connected",
        "active_commission_rates": active_rates,
        "bonus_tiers": bonus_tiers,
    }


@router.get("/live")
async def liveness_check():
    """Liveness check. Returns 200 if the process is alive."""
    return {"status": "alive"}
