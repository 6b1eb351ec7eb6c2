"""
Rate catalog persistence.

Loads the rate tables into an immutable RateCatalog for the engine, and
seeds the default catalog on a fresh database.
"""

import logging
from typing import Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from salesops.config import Settings
from salesops.config import settings as default_settings
from salesops.models import (
    OPEN_ENDED_MAX_SALES,
    CommissionRate,
    DSRBonusTier,
    DstvPackage,
    PackageCommissionRate,
    SaleType,
)
from salesops.schemas.commission import (
    BonusTier,
    PackageCommission,
    PackageCommissionMode,
    ProductRate,
    RateCatalog,
    normalize_package_code,
)

logger = logging.getLogger(__name__)

# Default catalog written by seed_default_catalog()
DEFAULT_PRODUCT_RATES = {
    SaleType.FS: (5000, 1500),
    SaleType.DO: (2000, 1500),
    SaleType.DVS: (0, 1500),
}

DEFAULT_PACKAGES = [
    # (code, name, monthly price, flat commission)
    ("PREMIUM", "DStv Premium", 147000, 65000),
    ("COMPACT PLUS", "DStv Compact Plus", 90000, 35000),
    ("COMPACT", "DStv Compact", 50000, 17000),
    ("SHANGWE", "DStv Shangwe", 19000, 6000),
    ("ACCESS", "DStv Access", 11000, 2750),
    ("BOMBA", "DStv Bomba", 11000, 2750),
]

DEFAULT_BONUS_TIERS = [
    # (name, min, max, bonus, requires experience)
    ("KURUTA", 3, 4, 30000, False),
    ("SHABA", 5, 9, 50000, False),
    ("SHABA", 10, 14, 115000, False),
    ("FEDHA", 15, 19, 200000, False),
    ("FEDHA", 20, 24, 300000, False),
    ("DHAHABU", 25, 44, 675000, False),
    ("TANZANITE", 45, OPEN_ENDED_MAX_SALES, 1000000, True),
]


def _max_sales(stored: int) -> Optional[int]:
    if stored is None or stored >= OPEN_ENDED_MAX_SALES:
        return None
    return stored


async def load_rate_catalog(
    db: AsyncSession,
    settings: Optional[Settings] = None,
) -> RateCatalog:
    """
    Read the rate tables into a RateCatalog snapshot.

    Args:
        db: Database session
        settings: Policy settings (package commission mode, stock link rule);
            the application settings when omitted

    Returns:
        RateCatalog built from active rows
    """
    settings = settings or default_settings

    result = await db.execute(
        select(CommissionRate)
        .where(CommissionRate.is_active == True)
        .order_by(CommissionRate.id)
    )
    product_rates: Dict[SaleType, ProductRate] = {}
    for row in result.scalars().all():
        if row.product_type in product_rates:
            logger.warning(
                f"Duplicate active commission rate for {row.product_type.value}, "
                f"keeping the first"
            )
            continue
        product_rates[row.product_type] = ProductRate(
            upfront=row.upfront_amount,
            activation=row.activation_amount,
        )

    mode = PackageCommissionMode(settings.package_commission_mode)
    if mode == PackageCommissionMode.FLAT:
        result = await db.execute(select(PackageCommissionRate))
        package_commission = PackageCommission(
            mode=mode,
            flat_amounts={
                row.package_code: row.commission_amount
                for row in result.scalars().all()
            },
        )
    else:
        result = await db.execute(
            select(DstvPackage).where(DstvPackage.is_active == True)
        )
        package_commission = PackageCommission(
            mode=mode,
            percent_of_monthly_price=settings.package_commission_percent,
            package_prices={
                row.package_code: row.monthly_price
                for row in result.scalars().all()
            },
        )

    result = await db.execute(
        select(DSRBonusTier).order_by(DSRBonusTier.min_sales, DSRBonusTier.id)
    )
    bonus_tiers = [
        BonusTier(
            tier_name=row.tier_name,
            min_sales=row.min_sales,
            max_sales=_max_sales(row.max_sales),
            bonus_amount=row.bonus_amount,
            requires_experience=row.requires_experience,
        )
        for row in result.scalars().all()
    ]

    catalog = RateCatalog(
        product_rates=product_rates,
        package_commission=package_commission,
        bonus_tiers=bonus_tiers,
        require_stock_link=settings.require_stock_link,
    )

    for first, second in catalog.overlapping_tiers():
        logger.warning(
            f"Bonus tiers {first} and {second} overlap; "
            f"the lower tier wins for shared sales counts"
        )

    return catalog


async def _is_empty(db: AsyncSession, model) -> bool:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one() == 0


async def seed_default_catalog(db: AsyncSession) -> bool:
    """
    Insert the default rate catalog into empty rate tables.

    Tables that already hold rows are left untouched.

    Returns:
        True if anything was inserted
    """
    seeded = False

    if await _is_empty(db, CommissionRate):
        for product_type, (upfront, activation) in DEFAULT_PRODUCT_RATES.items():
            db.add(CommissionRate(
                product_type=product_type,
                upfront_amount=upfront,
                activation_amount=activation,
                is_active=True,
            ))
        logger.info("Seeded default commission rates")
        seeded = True

    if await _is_empty(db, DstvPackage):
        for code, name, price, _ in DEFAULT_PACKAGES:
            db.add(DstvPackage(
                package_code=normalize_package_code(code),
                package_name=name,
                monthly_price=price,
                is_active=True,
            ))
        logger.info("Seeded default DSTV packages")
        seeded = True

    if await _is_empty(db, PackageCommissionRate):
        for code, _, _, amount in DEFAULT_PACKAGES:
            db.add(PackageCommissionRate(
                package_code=normalize_package_code(code),
                commission_amount=amount,
            ))
        logger.info("Seeded default package commissions")
        seeded = True

    if await _is_empty(db, DSRBonusTier):
        for name, min_sales, max_sales, bonus, requires_experience in DEFAULT_BONUS_TIERS:
            db.add(DSRBonusTier(
                tier_name=name,
                min_sales=min_sales,
                max_sales=max_sales,
                bonus_amount=bonus,
                requires_experience=requires_experience,
            ))
        logger.info("Seeded default bonus tiers")
        seeded = True

    if seeded:
        await db.flush()

    return seeded
