"""
Month-to-date commission summaries for DSRs and teams.

Flow per DSR:
    sales this month -> SaleFacts -> calculate_batch
    -> tier from (period sales count, tenure) -> bonus -> aggregate
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salesops.config import settings
from salesops.models import DSR, Sale, Team
from salesops.schemas.commission import (
    DSRCommissionSummary,
    RateCatalog,
    TeamCommissionSummary,
)
from salesops.services.aggregator import (
    aggregate,
    aggregate_by_product_type,
    merge_summaries,
)
from salesops.services.catalog import load_rate_catalog
from salesops.services.commission import InvalidInput, calculate_batch
from salesops.services.sale_mapper import sale_fact_from_row
from salesops.services.tiers import resolve_bonus, resolve_tier, tenure_in_months

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; stored values are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def period_start_for(now: datetime) -> datetime:
    """First instant of the calendar month containing now (UTC)."""
    return _as_utc(now).replace(day=1, hour=0, minute=0, second=0, microsecond=0)


async def _summarize_dsr(
    db: AsyncSession,
    dsr: DSR,
    now: datetime,
    rates: RateCatalog,
) -> DSRCommissionSummary:
    period_start = period_start_for(now)

    result = await db.execute(
        select(Sale)
        .where(
            Sale.dsr_id == dsr.id,
            Sale.created_at >= period_start,
            Sale.created_at <= now,
        )
        .order_by(Sale.created_at)
    )
    sales = result.scalars().all()

    facts = []
    invalid_rows = 0
    for sale in sales:
        try:
            facts.append(sale_fact_from_row(sale))
        except InvalidInput as e:
            invalid_rows += 1
            logger.warning(f"Sale {sale.sale_id} of DSR {dsr.id} not mappable: {e}")

    results = calculate_batch(facts, rates)

    # Valid sales count toward the tier, paid or not; rejected ones never do
    sales_count = sum(1 for r in results if not r.is_invalid)
    tenure = tenure_in_months(_as_utc(dsr.joined_at), now)
    tier = resolve_tier(
        sales_count,
        tenure,
        rates.bonus_tiers,
        experience_months=settings.experience_threshold_months,
    )
    bonus = resolve_bonus(tier, sales_count, rates.bonus_tiers)

    summary = aggregate(results, period_bonus=bonus)
    if invalid_rows:
        summary = summary.model_copy(update={
            "total_sales_count": summary.total_sales_count + invalid_rows,
            "invalid_count": summary.invalid_count + invalid_rows,
        })

    if summary.config_gap_count:
        logger.warning(
            f"DSR {dsr.id}: {summary.config_gap_count} sale(s) reference "
            f"packages without a commission rate"
        )

    logger.debug(
        f"DSR {dsr.id}: {sales_count} sales, tenure {tenure}m, tier {tier}, "
        f"earned {summary.total_earned} {settings.currency}"
    )

    return DSRCommissionSummary(
        dsr_id=dsr.id,
        dsr_name=dsr.full_name,
        team_id=dsr.team_id,
        period_start=period_start.date().isoformat(),
        sales_count_in_period=sales_count,
        tenure_in_months=tenure,
        tier=tier,
        summary=summary,
        by_product_type=aggregate_by_product_type(results),
    )


async def compute_dsr_summary(
    db: AsyncSession,
    dsr_id: int,
    now: Optional[datetime] = None,
    rates: Optional[RateCatalog] = None,
) -> DSRCommissionSummary:
    """
    Month-to-date commission summary of one DSR.

    Args:
        db: Database session
        dsr_id: DSR to summarise
        now: End of the period; current UTC time when omitted
        rates: Rate catalog; loaded from the database when omitted

    Raises:
        LookupError: no DSR with that id
    """
    dsr = await db.get(DSR, dsr_id)
    if not dsr:
        raise LookupError(f"DSR {dsr_id} not found")

    now = _as_utc(now) if now else datetime.now(timezone.utc)
    if rates is None:
        rates = await load_rate_catalog(db)

    return await _summarize_dsr(db, dsr, now, rates)


async def compute_team_summary(
    db: AsyncSession,
    team_id: int,
    now: Optional[datetime] = None,
    rates: Optional[RateCatalog] = None,
) -> TeamCommissionSummary:
    """
    Month-to-date commission summary of a team: one row per active DSR
    plus merged team totals.

    Raises:
        LookupError: no team with that id
    """
    team = await db.get(Team, team_id)
    if not team:
        raise LookupError(f"Team {team_id} not found")

    now = _as_utc(now) if now else datetime.now(timezone.utc)
    if rates is None:
        rates = await load_rate_catalog(db)

    result = await db.execute(
        select(DSR)
        .where(DSR.team_id == team_id, DSR.is_active == True)
        .order_by(DSR.id)
    )
    rows: List[DSRCommissionSummary] = []
    for dsr in result.scalars().all():
        rows.append(await _summarize_dsr(db, dsr, now, rates))

    return TeamCommissionSummary(
        team_id=team.id,
        team_name=team.name,
        period_start=period_start_for(now).date().isoformat(),
        dsrs=rows,
        summary=merge_summaries(*[row.summary for row in rows]),
    )
