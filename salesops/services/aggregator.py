"""
Fold per-sale commission results into earned / pending / potential totals.

Aggregation is order-independent: summaries of any partition of a result
list merge to the summary of the whole list, provided the period bonus is
applied to exactly one part.
"""

from typing import Dict, Iterable

from salesops.models.rates import SaleType
from salesops.schemas.commission import CommissionResult, CommissionStatus, Summary


def aggregate(results: Iterable[CommissionResult], period_bonus: int = 0) -> Summary:
    """Summarise commission results, adding the period bonus once."""
    if period_bonus < 0:
        raise ValueError("period_bonus must not be negative")

    counts = {
        "total_sales_count": 0,
        "eligible_count": 0,
        "pending_count": 0,
        "not_eligible_count": 0,
        "invalid_count": 0,
        "config_gap_count": 0,
    }
    earned = 0
    pending = 0
    potential = 0

    for result in results:
        counts["total_sales_count"] += 1
        if result.config_gap:
            counts["config_gap_count"] += 1

        if result.is_invalid:
            counts["invalid_count"] += 1
            continue

        total = result.breakdown.total_commission
        potential += total

        if result.status == CommissionStatus.ELIGIBLE:
            counts["eligible_count"] += 1
            earned += total
        elif result.status == CommissionStatus.PENDING_APPROVAL:
            counts["pending_count"] += 1
            pending += total
        else:
            counts["not_eligible_count"] += 1

    return Summary(
        **counts,
        total_earned=earned + period_bonus,
        total_pending=pending,
        total_potential=potential + period_bonus,
        bonus_amount=period_bonus,
    )


def merge_summaries(*summaries: Summary) -> Summary:
    """Field-by-field sum of summaries."""
    merged = {name: 0 for name in Summary.model_fields}
    for summary in summaries:
        for name in merged:
            merged[name] += getattr(summary, name)
    return Summary(**merged)


def aggregate_by_product_type(results: Iterable[CommissionResult]) -> Dict[SaleType, Summary]:
    """One summary per product type seen in the results (no period bonus)."""
    grouped: Dict[SaleType, list] = {}
    for result in results:
        if result.sale is None:
            continue
        grouped.setdefault(result.sale.product_type, []).append(result)
    return {product_type: aggregate(group) for product_type, group in grouped.items()}
