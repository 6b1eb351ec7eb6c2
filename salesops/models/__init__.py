"""
Database models for salesops.

All models are exported here for convenient imports:
    from salesops.models import Sale, DSR, CommissionRate, etc.
"""

from salesops.models.base import Base, TimestampMixin
from salesops.models.rates import (
    OPEN_ENDED_MAX_SALES,
    CommissionRate,
    DSRBonusTier,
    DstvPackage,
    PackageCommissionRate,
    SaleType,
)
from salesops.models.sale import DSR, PaymentStatus, Sale, Team

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Rates
    "CommissionRate",
    "DstvPackage",
    "PackageCommissionRate",
    "DSRBonusTier",
    "OPEN_ENDED_MAX_SALES",
    "SaleType",
    # Sales force
    "Team",
    "DSR",
    "Sale",
    "PaymentStatus",
]
