"""
Sales force and sale records: teams, DSRs and the sales they register.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, func
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from salesops.models.base import Base, TimestampMixin
from salesops.models.rates import SaleType


class PaymentStatus(str, Enum):
    """Whether the customer has paid for the stock unit."""
    PAID = "paid"
    UNPAID = "unpaid"


class Team(Base, TimestampMixin):
    """A sales team led by a team leader (TL)."""

    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    tl_name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )

    dsrs: Mapped[List["DSR"]] = relationship(
        "DSR",
        back_populates="team",
    )

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, name='{self.name}')>"


class DSR(Base, TimestampMixin):
    """
    Direct Sales Representative.

    joined_at drives tenure, which gates experience-only bonus tiers.
    """

    __tablename__ = "dsrs"

    id: Mapped[int] = mapped_column(primary_key=True)
    full_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    territory: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    team_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("teams.id"),
        nullable=True,
        index=True,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    team: Mapped[Optional["Team"]] = relationship(
        "Team",
        back_populates="dsrs",
    )
    sales: Mapped[List["Sale"]] = relationship(
        "Sale",
        back_populates="dsr",
    )

    def __repr__(self) -> str:
        return f"<DSR(id={self.id}, full_name='{self.full_name}')>"


class Sale(Base, TimestampMixin):
    """
    A sale registered by a DSR.

    Verification (TL) and approval (admin) flags are set by external
    workflows; NULL means the step has not happened yet.
    """

    __tablename__ = "sales"

    id: Mapped[int] = mapped_column(primary_key=True)
    sale_id: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )
    dsr_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("dsrs.id"),
        nullable=True,
        index=True,
    )
    team_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("teams.id"),
        nullable=True,
    )
    sale_type: Mapped[SaleType] = mapped_column(
        SQLAlchemyEnum(
            SaleType,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )
    package_option: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        comment="'Package' or 'No Package'",
    )
    dstv_package: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    payment_status: Mapped[Optional[PaymentStatus]] = mapped_column(
        SQLAlchemyEnum(
            PaymentStatus,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=True,
    )
    tl_verified: Mapped[Optional[bool]] = mapped_column(
        Boolean,
        nullable=True,
    )
    tl_verified_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    admin_approved: Mapped[Optional[bool]] = mapped_column(
        Boolean,
        nullable=True,
    )
    admin_approved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    stock_id: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    smart_card_number: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    sn_number: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )

    dsr: Mapped[Optional["DSR"]] = relationship(
        "DSR",
        back_populates="sales",
    )

    def __repr__(self) -> str:
        return f"<Sale(sale_id='{self.sale_id}', type={self.sale_type})>"
