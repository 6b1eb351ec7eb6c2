"""
Seed demo sales data for salesops.

Usage:
    python scripts/seed_sales.py

Or with custom DATABASE_URL:
    DATABASE_URL="postgresql://..." python scripts/seed_sales.py

This script creates:
- The default rate catalog (if the rate tables are empty)
- A test team with two DSRs (one new, one experienced)
- Month-to-date sales in a mix of payment and approval states
and prints each DSR's commission summary.
"""

import asyncio
import os
import random
import sys
from datetime import datetime, timedelta, timezone

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from salesops.db import engine, get_db_context
from salesops.models import DSR, PaymentStatus, Sale, SaleType, Team
from salesops.services.catalog import seed_default_catalog
from salesops.services.dsr_summary import compute_dsr_summary


# ===== TEST DATA =====

TEST_TEAM = "Test Team Kariakoo"

TEST_DSRS = [
    # (name, tenure in days)
    ("Test DSR Amani", 20),
    ("Test DSR Neema", 200),
]

TEST_PACKAGES = ["PREMIUM", "COMPACT PLUS", "COMPACT", "SHANGWE", "ACCESS", "BOMBA"]


async def create_test_team(db) -> Team:
    """Create the test team and its DSRs."""
    result = await db.execute(select(Team).where(Team.name == TEST_TEAM))
    team = result.scalar_one_or_none()

    if not team:
        team = Team(name=TEST_TEAM, tl_name="Test TL")
        db.add(team)
        await db.flush()
        print(f"Created team: {team.name} (id={team.id})")

        now = datetime.now(timezone.utc)
        for name, tenure_days in TEST_DSRS:
            dsr = DSR(
                full_name=name,
                territory="Dar es Salaam",
                team_id=team.id,
                joined_at=now - timedelta(days=tenure_days),
                is_active=True,
            )
            db.add(dsr)
        await db.flush()
    else:
        print(f"Using existing team: {team.name} (id={team.id})")

    return team


async def create_test_sales(db, dsr: DSR, count: int) -> int:
    """Create month-to-date sales for a DSR."""
    now = datetime.now(timezone.utc)
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    span = max(int((now - month_start).total_seconds()), 1)

    for i in range(count):
        sale_type = random.choice(list(SaleType))
        with_package = sale_type == SaleType.DVS or random.random() < 0.7
        paid = random.random() < 0.8
        verified = paid and random.random() < 0.8
        # None: awaiting the admin; False: rejected
        approved = random.choice([True, True, True, None, False]) if verified else None

        db.add(Sale(
            sale_id=f"TEST-{dsr.id}-{now:%Y%m%d%H%M%S}-{i:03d}",
            dsr_id=dsr.id,
            team_id=dsr.team_id,
            sale_type=sale_type,
            package_option="Package" if with_package else "No Package",
            dstv_package=random.choice(TEST_PACKAGES) if with_package else None,
            payment_status=PaymentStatus.PAID if paid else PaymentStatus.UNPAID,
            tl_verified=verified,
            admin_approved=approved,
            stock_id=None if sale_type == SaleType.DVS else f"STK-{dsr.id}-{i:04d}",
            created_at=month_start + timedelta(seconds=random.randrange(span)),
        ))

    await db.flush()
    return count


async def seed_all(sales_per_dsr: int):
    """Seed all test data."""
    print("Seeding salesops test data...")

    async with get_db_context() as db:
        await seed_default_catalog(db)

        team = await create_test_team(db)

        result = await db.execute(select(DSR).where(DSR.team_id == team.id))
        dsrs = result.scalars().all()

        for dsr in dsrs:
            created = await create_test_sales(db, dsr, sales_per_dsr)
            print(f"  - {dsr.full_name}: {created} sales")

        await db.commit()

        print("\n" + "="*50)
        print("TEST DATA CREATED SUCCESSFULLY!")
        print("="*50)

        for dsr in dsrs:
            summary = await compute_dsr_summary(db, dsr.id)
            print(f"""
{summary.dsr_name} (tenure {summary.tenure_in_months}m)
  Sales this month: {summary.sales_count_in_period}
  Tier:             {summary.tier}
  Earned:           {summary.summary.total_earned}
  Pending:          {summary.summary.total_pending}
  Potential:        {summary.summary.total_potential}""")

    await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Seed test sales for salesops")
    parser.add_argument("--sales", type=int, default=12, help="Sales to create per DSR")

    args = parser.parse_args()

    asyncio.run(seed_all(sales_per_dsr=args.sales))
