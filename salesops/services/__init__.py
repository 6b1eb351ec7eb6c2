"""Business logic services."""

from salesops.services.aggregator import aggregate, aggregate_by_product_type, merge_summaries
from salesops.services.catalog import load_rate_catalog, seed_default_catalog
from salesops.services.commission import InvalidInput, calculate, calculate_batch
from salesops.services.dsr_summary import compute_dsr_summary, compute_team_summary
from salesops.services.sale_mapper import sale_fact_from_row
from salesops.services.tiers import resolve_bonus, resolve_tier, tenure_in_months

__all__ = [
    "InvalidInput",
    "calculate",
    "calculate_batch",
    "resolve_tier",
    "resolve_bonus",
    "tenure_in_months",
    "aggregate",
    "aggregate_by_product_type",
    "merge_summaries",
    "sale_fact_from_row",
    "load_rate_catalog",
    "seed_default_catalog",
    "compute_dsr_summary",
    "compute_team_summary",
]
