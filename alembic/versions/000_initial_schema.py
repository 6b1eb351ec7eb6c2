"""Initial database schema

Revision ID: 000_initial_schema
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "000_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SALE_TYPE = sa.Enum("FS", "DO", "DVS", name="saletype")


def upgrade() -> None:
    """Create rate tables and sales tables."""

    # Commission rates per product type
    op.create_table(
        "commission_rates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_type", SALE_TYPE, nullable=False),
        sa.Column("upfront_amount", sa.Integer(), default=0, nullable=False),
        sa.Column("activation_amount", sa.Integer(), default=0, nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), default=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), onupdate=sa.func.now()),
    )
    op.create_index("ix_commission_rates_product_type", "commission_rates", ["product_type"])

    # DSTV packages
    op.create_table(
        "dstv_packages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("package_code", sa.String(50), unique=True, nullable=False),
        sa.Column("package_name", sa.String(100), nullable=False),
        sa.Column("monthly_price", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), default=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), onupdate=sa.func.now()),
    )
    op.create_index("ix_dstv_packages_package_code", "dstv_packages", ["package_code"], unique=True)

    # Flat package commissions
    op.create_table(
        "package_commission_rates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("package_code", sa.String(50), unique=True, nullable=False),
        sa.Column("commission_amount", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), onupdate=sa.func.now()),
    )
    op.create_index(
        "ix_package_commission_rates_package_code",
        "package_commission_rates",
        ["package_code"],
        unique=True,
    )

    # Bonus tiers (max_sales = 999 means open-ended)
    op.create_table(
        "dsr_bonus_tiers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tier_name", sa.String(50), nullable=False),
        sa.Column("min_sales", sa.Integer(), nullable=False),
        sa.Column("max_sales", sa.Integer(), default=999, nullable=False),
        sa.Column("bonus_amount", sa.Integer(), default=0, nullable=False),
        sa.Column("requires_experience", sa.Boolean(), default=False, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), onupdate=sa.func.now()),
    )

    # Teams
    op.create_table(
        "teams",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("tl_name", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), onupdate=sa.func.now()),
    )

    # DSRs
    op.create_table(
        "dsrs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("territory", sa.String(100), nullable=True),
        sa.Column("team_id", sa.Integer(), sa.ForeignKey("teams.id"), nullable=True),
        sa.Column("joined_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("is_active", sa.Boolean(), default=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), onupdate=sa.func.now()),
    )
    op.create_index("ix_dsrs_team_id", "dsrs", ["team_id"])

    # Sales
    op.create_table(
        "sales",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sale_id", sa.String(50), unique=True, nullable=False),
        sa.Column("dsr_id", sa.Integer(), sa.ForeignKey("dsrs.id"), nullable=True),
        sa.Column("team_id", sa.Integer(), sa.ForeignKey("teams.id"), nullable=True),
        sa.Column("sale_type", SALE_TYPE, nullable=False),
        sa.Column("package_option", sa.String(20), nullable=True, comment="'Package' or 'No Package'"),
        sa.Column("dstv_package", sa.String(50), nullable=True),
        sa.Column("payment_status", sa.Enum("paid", "unpaid", name="paymentstatus"), nullable=True),
        sa.Column("tl_verified", sa.Boolean(), nullable=True),
        sa.Column("tl_verified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("admin_approved", sa.Boolean(), nullable=True),
        sa.Column("admin_approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("stock_id", sa.String(50), nullable=True),
        sa.Column("smart_card_number", sa.String(50), nullable=True),
        sa.Column("sn_number", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), onupdate=sa.func.now()),
    )
    op.create_index("ix_sales_sale_id", "sales", ["sale_id"], unique=True)
    op.create_index("ix_sales_dsr_id", "sales", ["dsr_id"])
    op.create_index("ix_sales_dsr_created", "sales", ["dsr_id", "created_at"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("sales")
    op.drop_table("dsrs")
    op.drop_table("teams")
    op.drop_table("dsr_bonus_tiers")
    op.drop_table("package_commission_rates")
    op.drop_table("dstv_packages")
    op.drop_table("commission_rates")

    op.execute("DROP TYPE IF EXISTS paymentstatus")
    op.execute("DROP TYPE IF EXISTS saletype")
