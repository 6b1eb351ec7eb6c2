"""Commission engine value types: sale facts, rate catalog, results, summaries.

All money is an integer amount of the smallest currency unit. Every model
here is frozen; a calculation never mutates its inputs.
"""

from decimal import ROUND_DOWN, Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from salesops.models.rates import SaleType

# Tier name returned when no bonus band matches
NO_TIER = "NO_TIER"


def normalize_package_code(code: Optional[str]) -> Optional[str]:
    """Package codes are matched case-insensitively, ignoring padding."""
    if code is None:
        return None
    code = code.strip().upper()
    return code or None


class PackageSelection(str, Enum):
    """Whether a subscription package was sold with the unit."""
    WITH_PACKAGE = "package"
    NO_PACKAGE = "no_package"


class SalePaymentStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"


class CommissionStatus(str, Enum):
    """Commission readiness of a single sale."""
    ELIGIBLE = "eligible"
    PENDING_APPROVAL = "pending-approval"
    NOT_ELIGIBLE = "not-eligible"


class PackageCommissionMode(str, Enum):
    FLAT = "flat"
    PERCENT_OF_MONTHLY_PRICE = "percent_of_monthly_price"


# ── Input ─────────────────────────────────────────────────


class SaleFact(BaseModel):
    """The facts about one sale that commission depends on."""

    model_config = ConfigDict(frozen=True)

    product_type: SaleType
    package_selection: PackageSelection
    package_code: Optional[str] = Field(None, max_length=50)
    payment_status: SalePaymentStatus
    tl_verified: bool = False
    admin_approved: bool = False
    admin_rejected: bool = False
    stock_link_present: bool = True

    @field_validator("package_code")
    @classmethod
    def clean_package_code(cls, v: Optional[str]) -> Optional[str]:
        return normalize_package_code(v)

    @model_validator(mode="after")
    def package_code_needs_package(self) -> "SaleFact":
        if (
            self.package_selection == PackageSelection.NO_PACKAGE
            and self.package_code is not None
        ):
            raise ValueError("package_code is only allowed with a package selection")
        return self

    @model_validator(mode="after")
    def approval_is_exclusive(self) -> "SaleFact":
        if self.admin_approved and self.admin_rejected:
            raise ValueError("a sale cannot be both approved and rejected")
        return self

    @property
    def is_paid(self) -> bool:
        return self.payment_status == SalePaymentStatus.PAID


# ── Rate catalog ──────────────────────────────────────────


class ProductRate(BaseModel):
    """Per-unit commission for one product type."""

    model_config = ConfigDict(frozen=True)

    upfront: int = Field(0, ge=0)
    activation: int = Field(0, ge=0)


class PackageCommission(BaseModel):
    """
    Package commission configuration.

    flat: a fixed amount per package code.
    percent_of_monthly_price: a percentage of the package's monthly price,
    truncated to whole units.
    """

    model_config = ConfigDict(frozen=True)

    mode: PackageCommissionMode = PackageCommissionMode.FLAT
    flat_amounts: Dict[str, int] = Field(default_factory=dict)
    percent_of_monthly_price: Decimal = Field(Decimal("0"), ge=0, le=100)
    package_prices: Dict[str, int] = Field(default_factory=dict)

    @field_validator("flat_amounts", "package_prices")
    @classmethod
    def normalize_amounts(cls, v: Dict[str, int]) -> Dict[str, int]:
        cleaned = {}
        for code, amount in v.items():
            key = normalize_package_code(code)
            if key is None:
                raise ValueError("package code must not be empty")
            if amount < 0:
                raise ValueError(f"amount for {key} must not be negative")
            cleaned[key] = amount
        return cleaned

    def lookup(self, package_code: Optional[str]) -> Optional[int]:
        """Commission for a package code, or None when the code is not configured."""
        code = normalize_package_code(package_code)
        if code is None:
            return None

        if self.mode == PackageCommissionMode.FLAT:
            return self.flat_amounts.get(code)

        price = self.package_prices.get(code)
        if price is None:
            return None
        amount = Decimal(price) * self.percent_of_monthly_price / Decimal("100")
        return int(amount.to_integral_value(rounding=ROUND_DOWN))


class BonusTier(BaseModel):
    """
    One monthly bonus band.

    The range is inclusive on both ends; max_sales=None means open-ended.
    """

    model_config = ConfigDict(frozen=True)

    tier_name: str = Field(..., min_length=1, max_length=50)
    min_sales: int = Field(..., ge=0)
    max_sales: Optional[int] = Field(None, ge=0)
    bonus_amount: int = Field(0, ge=0)
    requires_experience: bool = False

    @model_validator(mode="after")
    def check_range(self) -> "BonusTier":
        if self.max_sales is not None and self.max_sales < self.min_sales:
            raise ValueError(
                f"tier {self.tier_name}: max_sales {self.max_sales} "
                f"is below min_sales {self.min_sales}"
            )
        return self

    def contains(self, sales_count: int) -> bool:
        if sales_count < self.min_sales:
            return False
        return self.max_sales is None or sales_count <= self.max_sales


class RateCatalog(BaseModel):
    """Snapshot of every rate a calculation may consult."""

    model_config = ConfigDict(frozen=True)

    product_rates: Dict[SaleType, ProductRate]
    package_commission: PackageCommission = Field(default_factory=PackageCommission)
    bonus_tiers: List[BonusTier] = Field(default_factory=list)
    require_stock_link: bool = False

    @field_validator("bonus_tiers")
    @classmethod
    def sort_tiers(cls, v: List[BonusTier]) -> List[BonusTier]:
        # Stable: equal min_sales keep their configured order
        return sorted(v, key=lambda t: t.min_sales)

    def resolve_package_commission(self, package_code: Optional[str]) -> int:
        """Commission for a package; unknown codes resolve to zero."""
        amount = self.package_commission.lookup(package_code)
        return amount if amount is not None else 0

    def has_package_commission(self, package_code: Optional[str]) -> bool:
        return self.package_commission.lookup(package_code) is not None

    def overlapping_tiers(self) -> List[Tuple[str, str]]:
        """Pairs of tier names whose sales ranges overlap."""
        overlaps = []
        tiers = self.bonus_tiers
        for i, first in enumerate(tiers):
            for second in tiers[i + 1:]:
                if first.max_sales is None or second.min_sales <= first.max_sales:
                    overlaps.append((first.tier_name, second.tier_name))
        return overlaps


# ── Output ────────────────────────────────────────────────


class CommissionBreakdown(BaseModel):
    """Commission value of a sale if and when it is earned."""

    model_config = ConfigDict(frozen=True)

    upfront_amount: int = Field(0, ge=0)
    activation_amount: int = Field(0, ge=0)
    package_amount: int = Field(0, ge=0)
    bonus_amount: int = Field(0, ge=0)

    @computed_field
    @property
    def total_commission(self) -> int:
        return (
            self.upfront_amount
            + self.activation_amount
            + self.package_amount
            + self.bonus_amount
        )


class CommissionResult(BaseModel):
    """Eligibility and breakdown for one sale."""

    model_config = ConfigDict(frozen=True)

    sale: Optional[SaleFact] = None
    status: CommissionStatus
    reason: Optional[str] = None
    breakdown: CommissionBreakdown = Field(default_factory=CommissionBreakdown)
    config_gap: bool = False
    is_invalid: bool = False


class Summary(BaseModel):
    """Folded commission totals over a set of sales."""

    model_config = ConfigDict(frozen=True)

    total_sales_count: int = 0
    eligible_count: int = 0
    pending_count: int = 0
    not_eligible_count: int = 0
    invalid_count: int = 0
    config_gap_count: int = 0
    total_earned: int = 0
    total_pending: int = 0
    total_potential: int = 0
    bonus_amount: int = 0


class DSRCommissionSummary(BaseModel):
    """Month-to-date commission view of one DSR."""

    dsr_id: int
    dsr_name: str
    team_id: Optional[int] = None
    period_start: str
    sales_count_in_period: int
    tenure_in_months: int
    tier: str
    summary: Summary
    by_product_type: Dict[SaleType, Summary] = Field(default_factory=dict)


class TeamCommissionSummary(BaseModel):
    """Commission view of a team: one row per DSR plus team totals."""

    team_id: int
    team_name: str
    period_start: str
    dsrs: List[DSRCommissionSummary]
    summary: Summary


class CalculateRequest(BaseModel):
    """Calculate one sale, optionally against an explicit catalog."""

    sale: SaleFact
    rates: Optional[RateCatalog] = None
