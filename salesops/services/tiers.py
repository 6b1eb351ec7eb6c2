"""
Monthly bonus tier resolution.

A DSR's tier is chosen once per period from the number of sales in the
period and the DSR's tenure. Tiers flagged requires_experience are only
reachable after DEFAULT_EXPERIENCE_MONTHS of tenure; a DSR below that
falls back to the best tier open to them.
"""

from datetime import datetime
from typing import Optional, Sequence

from salesops.schemas.commission import NO_TIER, BonusTier

DEFAULT_EXPERIENCE_MONTHS = 3
DAYS_PER_MONTH = 30


def _sorted(tiers: Sequence[BonusTier]) -> list:
    return sorted(tiers, key=lambda t: t.min_sales)


def _fallback_tier(sales_count: int, tiers: Sequence[BonusTier]) -> Optional[BonusTier]:
    """Highest tier without an experience gate whose minimum is reached."""
    best = None
    for tier in _sorted(tiers):
        if tier.requires_experience or tier.min_sales > sales_count:
            continue
        best = tier
    return best


def resolve_tier(
    sales_count: int,
    tenure_months: int,
    tiers: Sequence[BonusTier],
    experience_months: int = DEFAULT_EXPERIENCE_MONTHS,
) -> str:
    """Tier name for a period sales count and tenure, or NO_TIER.

    Overlapping ranges resolve to the first match in ascending min_sales order.
    """
    matched = None
    for tier in _sorted(tiers):
        if tier.contains(sales_count):
            matched = tier
            break

    if matched is None:
        return NO_TIER

    if matched.requires_experience and tenure_months < experience_months:
        fallback = _fallback_tier(sales_count, tiers)
        return fallback.tier_name if fallback else NO_TIER

    return matched.tier_name


def resolve_bonus(tier_name: str, sales_count: int, tiers: Sequence[BonusTier]) -> int:
    """Bonus amount for a resolved tier name.

    A tier name can cover several bands; the band containing the count wins,
    else the highest band whose minimum is reached.
    """
    if tier_name == NO_TIER:
        return 0

    named = [t for t in _sorted(tiers) if t.tier_name == tier_name]
    for tier in named:
        if tier.contains(sales_count):
            return tier.bonus_amount

    reached = [t for t in named if t.min_sales <= sales_count]
    if reached:
        return reached[-1].bonus_amount
    return 0


def tenure_in_months(joined_at: datetime, now: datetime) -> int:
    """Whole 30-day months between joining and now, never negative."""
    days = (now - joined_at).days
    return max(days // DAYS_PER_MONTH, 0)
