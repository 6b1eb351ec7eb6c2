"""
Rate tables: product commission rates, package prices and commissions,
DSR bonus tiers.

These rows are the persisted form of the rate catalog. They are read by
salesops.services.catalog and never touched by the calculation engine.
"""

from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column

from salesops.models.base import Base, TimestampMixin

# Stored in dsr_bonus_tiers.max_sales to mean "min_sales or more"
OPEN_ENDED_MAX_SALES = 999


class SaleType(str, Enum):
    """Product sold in a sale."""
    FS = "FS"      # Full Set: decoder + dish + installation kit
    DO = "DO"      # Decoder Only
    DVS = "DVS"    # Digital Virtual Stock, no tracked inventory unit


class CommissionRate(Base, TimestampMixin):
    """
    Upfront and activation commission per product type.

    Only rows with is_active=True take part in calculations.
    """

    __tablename__ = "commission_rates"

    id: Mapped[int] = mapped_column(primary_key=True)
    product_type: Mapped[SaleType] = mapped_column(
        SQLAlchemyEnum(
            SaleType,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
        index=True,
    )
    upfront_amount: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    activation_amount: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<CommissionRate(product_type={self.product_type}, "
            f"upfront={self.upfront_amount}, activation={self.activation_amount})>"
        )


class DstvPackage(Base, TimestampMixin):
    """A DSTV subscription package and its monthly price."""

    __tablename__ = "dstv_packages"

    id: Mapped[int] = mapped_column(primary_key=True)
    package_code: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )
    package_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    monthly_price: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<DstvPackage(code='{self.package_code}', price={self.monthly_price})>"


class PackageCommissionRate(Base, TimestampMixin):
    """Flat commission paid for selling a given package (flat mode)."""

    __tablename__ = "package_commission_rates"

    id: Mapped[int] = mapped_column(primary_key=True)
    package_code: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )
    commission_amount: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<PackageCommissionRate(code='{self.package_code}', "
            f"amount={self.commission_amount})>"
        )


class DSRBonusTier(Base, TimestampMixin):
    """
    Monthly bonus band by sales count.

    max_sales == OPEN_ENDED_MAX_SALES means the band has no upper bound.
    A tier name may repeat over several bands (e.g. two SHABA bands).
    """

    __tablename__ = "dsr_bonus_tiers"

    id: Mapped[int] = mapped_column(primary_key=True)
    tier_name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    min_sales: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    max_sales: Mapped[int] = mapped_column(
        Integer,
        default=OPEN_ENDED_MAX_SALES,
        nullable=False,
    )
    bonus_amount: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    requires_experience: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<DSRBonusTier(name='{self.tier_name}', "
            f"range={self.min_sales}-{self.max_sales}, bonus={self.bonus_amount})>"
        )
