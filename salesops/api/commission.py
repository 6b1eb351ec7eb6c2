"""Commission API endpoints."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from salesops.db import get_db
from salesops.schemas.commission import (
    CalculateRequest,
    CommissionResult,
    DSRCommissionSummary,
    RateCatalog,
    TeamCommissionSummary,
)
from salesops.services.catalog import load_rate_catalog
from salesops.services.commission import InvalidInput, calculate
from salesops.services.dsr_summary import compute_dsr_summary, compute_team_summary

router = APIRouter(prefix="/commission", tags=["Commission"])


@router.post("/calculate", response_model=CommissionResult)
async def calculate_sale(
    data: CalculateRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Calculate commission for a single sale.

    Uses the stored rate catalog unless the request carries its own.
    """
    rates = data.rates or await load_rate_catalog(db)
    try:
        return calculate(data.sale, rates)
    except InvalidInput as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )


@router.get("/rates", response_model=RateCatalog)
async def get_rates(db: AsyncSession = Depends(get_db)):
    """Get the current rate catalog."""
    return await load_rate_catalog(db)


@router.get("/dsr/{dsr_id}/summary", response_model=DSRCommissionSummary)
async def get_dsr_summary(
    dsr_id: int,
    as_of: Optional[datetime] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Month-to-date commission summary of a DSR."""
    try:
        return await compute_dsr_summary(db, dsr_id, now=as_of)
    except LookupError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.get("/team/{team_id}/summary", response_model=TeamCommissionSummary)
async def get_team_summary(
    team_id: int,
    as_of: Optional[datetime] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Month-to-date commission summary of a team."""
    try:
        return await compute_team_summary(db, team_id, now=as_of)
    except LookupError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
