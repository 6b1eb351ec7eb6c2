"""
Pytest configuration and fixtures.
"""

import os

# Application settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("IS_PRODUCTION", "true")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from salesops.models import Base, SaleType
from salesops.schemas.commission import (
    BonusTier,
    PackageCommission,
    ProductRate,
    RateCatalog,
)


# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def rates():
    """Small rate catalog with round numbers."""
    return RateCatalog(
        product_rates={
            SaleType.FS: ProductRate(upfront=2000, activation=0),
            SaleType.DO: ProductRate(upfront=1500, activation=500),
            SaleType.DVS: ProductRate(upfront=0, activation=1000),
        },
        package_commission=PackageCommission(
            flat_amounts={"COMPACT": 1500, "PREMIUM": 4000},
        ),
        bonus_tiers=[
            BonusTier(tier_name="Bronze", min_sales=0, max_sales=9, bonus_amount=0),
            BonusTier(tier_name="Silver", min_sales=10, max_sales=44, bonus_amount=50000),
            BonusTier(
                tier_name="Gold",
                min_sales=45,
                max_sales=None,
                bonus_amount=200000,
                requires_experience=True,
            ),
        ],
    )
