"""Pydantic schemas for request/response validation."""

from salesops.schemas.commission import (
    NO_TIER,
    BonusTier,
    CalculateRequest,
    CommissionBreakdown,
    CommissionResult,
    CommissionStatus,
    DSRCommissionSummary,
    PackageCommission,
    PackageCommissionMode,
    PackageSelection,
    ProductRate,
    RateCatalog,
    SaleFact,
    SalePaymentStatus,
    Summary,
    TeamCommissionSummary,
    normalize_package_code,
)

__all__ = [
    # Input
    "SaleFact",
    "PackageSelection",
    "SalePaymentStatus",
    # Rate catalog
    "RateCatalog",
    "ProductRate",
    "PackageCommission",
    "PackageCommissionMode",
    "BonusTier",
    "NO_TIER",
    "normalize_package_code",
    # Output
    "CommissionStatus",
    "CommissionBreakdown",
    "CommissionResult",
    "Summary",
    "DSRCommissionSummary",
    "TeamCommissionSummary",
    # Requests
    "CalculateRequest",
]
