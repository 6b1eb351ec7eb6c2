"""
Tests for per-sale commission calculation.

Covers:
- Eligibility states (eligible / pending-approval / not-eligible)
- Breakdown valuation (upfront, activation, package)
- DVS without package and unknown product types
- Package configuration gaps
- Stock link policy
- Batch calculation with invalid sales
"""

import os
from decimal import Decimal

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from pydantic import ValidationError

from salesops.models import SaleType
from salesops.schemas.commission import (
    CommissionStatus,
    PackageCommission,
    PackageCommissionMode,
    PackageSelection,
    ProductRate,
    RateCatalog,
    SaleFact,
    SalePaymentStatus,
)
from salesops.services.commission import InvalidInput, calculate, calculate_batch


def _make_sale(**kwargs):
    defaults = {
        "product_type": SaleType.FS,
        "package_selection": PackageSelection.WITH_PACKAGE,
        "package_code": "COMPACT",
        "payment_status": SalePaymentStatus.PAID,
        "tl_verified": True,
        "admin_approved": True,
    }
    defaults.update(kwargs)
    return SaleFact(**defaults)


# ── Scenarios ─────────────────────────────────────────────


class TestScenarios:
    def test_full_set_with_package_paid_and_approved(self, rates):
        result = calculate(_make_sale(), rates)

        assert result.status == CommissionStatus.ELIGIBLE
        assert result.reason is None
        assert result.breakdown.upfront_amount == 2000
        assert result.breakdown.activation_amount == 0
        assert result.breakdown.package_amount == 1500
        assert result.breakdown.bonus_amount == 0
        assert result.breakdown.total_commission == 3500

    def test_decoder_only_unpaid_keeps_upfront(self, rates):
        sale = _make_sale(
            product_type=SaleType.DO,
            package_selection=PackageSelection.NO_PACKAGE,
            package_code=None,
            payment_status=SalePaymentStatus.UNPAID,
            tl_verified=False,
            admin_approved=False,
        )
        result = calculate(sale, rates)

        assert result.status == CommissionStatus.NOT_ELIGIBLE
        assert result.reason == "unpaid"
        assert result.breakdown.upfront_amount == 1500
        assert result.breakdown.activation_amount == 0
        assert result.breakdown.package_amount == 0
        assert result.breakdown.total_commission == 1500

    def test_dvs_without_package_is_invalid(self, rates):
        sale = _make_sale(
            product_type=SaleType.DVS,
            package_selection=PackageSelection.NO_PACKAGE,
            package_code=None,
        )
        with pytest.raises(InvalidInput, match="DVS requires package"):
            calculate(sale, rates)

    def test_dvs_without_package_invalid_even_when_unpaid(self, rates):
        sale = _make_sale(
            product_type=SaleType.DVS,
            package_selection=PackageSelection.NO_PACKAGE,
            package_code=None,
            payment_status=SalePaymentStatus.UNPAID,
            tl_verified=False,
            admin_approved=False,
        )
        with pytest.raises(InvalidInput):
            calculate(sale, rates)

    def test_paid_but_unapproved_is_pending(self, rates):
        result = calculate(_make_sale(tl_verified=True, admin_approved=False), rates)

        assert result.status == CommissionStatus.PENDING_APPROVAL
        assert result.breakdown.total_commission == 3500


# ── Eligibility ───────────────────────────────────────────


class TestEligibility:
    @pytest.mark.parametrize("tl_verified,admin_approved", [
        (False, False),
        (True, False),
        (False, True),
    ])
    def test_missing_approval_step_is_pending(self, rates, tl_verified, admin_approved):
        sale = _make_sale(tl_verified=tl_verified, admin_approved=admin_approved)
        result = calculate(sale, rates)
        assert result.status == CommissionStatus.PENDING_APPROVAL

    def test_unpaid_never_eligible_even_when_approved(self, rates):
        sale = _make_sale(payment_status=SalePaymentStatus.UNPAID)
        result = calculate(sale, rates)

        assert result.status == CommissionStatus.NOT_ELIGIBLE
        assert result.breakdown.activation_amount == 0
        assert result.breakdown.package_amount == 0

    def test_admin_rejected_is_not_eligible(self, rates):
        sale = _make_sale(admin_approved=False, admin_rejected=True)
        result = calculate(sale, rates)

        assert result.status == CommissionStatus.NOT_ELIGIBLE
        assert result.reason == "admin rejected"
        assert result.breakdown.total_commission == 3500

    def test_unpaid_reason_wins_over_rejection(self, rates):
        sale = _make_sale(
            payment_status=SalePaymentStatus.UNPAID,
            admin_approved=False,
            admin_rejected=True,
        )
        assert calculate(sale, rates).reason == "unpaid"

    def test_awaiting_approval_is_not_rejection(self, rates):
        sale = _make_sale(admin_approved=False, admin_rejected=False)
        assert calculate(sale, rates).status == CommissionStatus.PENDING_APPROVAL

    def test_unknown_product_type_is_invalid(self):
        catalog = RateCatalog(product_rates={SaleType.FS: ProductRate(upfront=100)})
        sale = _make_sale(product_type=SaleType.DO)
        with pytest.raises(InvalidInput, match="no rates"):
            calculate(sale, catalog)


# ── Breakdown ─────────────────────────────────────────────


class TestBreakdown:
    def test_paid_adds_activation(self, rates):
        sale = _make_sale(
            product_type=SaleType.DO,
            package_selection=PackageSelection.NO_PACKAGE,
            package_code=None,
        )
        result = calculate(sale, rates)
        assert result.breakdown.upfront_amount == 1500
        assert result.breakdown.activation_amount == 500
        assert result.breakdown.total_commission == 2000

    def test_package_code_matched_case_insensitively(self, rates):
        result = calculate(_make_sale(package_code="  compact "), rates)
        assert result.breakdown.package_amount == 1500
        assert result.config_gap is False

    def test_unknown_package_is_config_gap(self, rates):
        result = calculate(_make_sale(package_code="MYSTERY"), rates)

        assert result.status == CommissionStatus.ELIGIBLE
        assert result.breakdown.package_amount == 0
        assert result.config_gap is True

    def test_package_without_code_is_config_gap(self, rates):
        result = calculate(_make_sale(package_code=None), rates)
        assert result.breakdown.package_amount == 0
        assert result.config_gap is True

    def test_unpaid_package_sale_is_not_a_config_gap(self, rates):
        sale = _make_sale(package_code="MYSTERY", payment_status=SalePaymentStatus.UNPAID)
        assert calculate(sale, rates).config_gap is False

    def test_dvs_with_package(self, rates):
        sale = _make_sale(product_type=SaleType.DVS, package_code="PREMIUM")
        result = calculate(sale, rates)

        assert result.status == CommissionStatus.ELIGIBLE
        assert result.breakdown.upfront_amount == 0
        assert result.breakdown.activation_amount == 1000
        assert result.breakdown.package_amount == 4000

    def test_percent_mode_truncates(self):
        catalog = RateCatalog(
            product_rates={SaleType.FS: ProductRate(upfront=0)},
            package_commission=PackageCommission(
                mode=PackageCommissionMode.PERCENT_OF_MONTHLY_PRICE,
                percent_of_monthly_price=Decimal("12.5"),
                package_prices={"COMPACT": 19999},
            ),
        )
        result = calculate(_make_sale(), catalog)
        # 19999 * 12.5% = 2499.875
        assert result.breakdown.package_amount == 2499

    def test_amounts_are_non_negative_integers(self, rates):
        for payment in SalePaymentStatus:
            for product_type in (SaleType.FS, SaleType.DO):
                sale = _make_sale(product_type=product_type, payment_status=payment)
                breakdown = calculate(sale, rates).breakdown
                for amount in (
                    breakdown.upfront_amount,
                    breakdown.activation_amount,
                    breakdown.package_amount,
                    breakdown.bonus_amount,
                    breakdown.total_commission,
                ):
                    assert isinstance(amount, int)
                    assert amount >= 0

    def test_calculation_is_repeatable(self, rates):
        sale = _make_sale()
        snapshot = rates.model_dump()

        first = calculate(sale, rates)
        second = calculate(sale, rates)

        assert first == second
        assert rates.model_dump() == snapshot


# ── Stock link policy ─────────────────────────────────────


class TestStockLink:
    def test_ignored_by_default(self, rates):
        result = calculate(_make_sale(stock_link_present=False), rates)
        assert result.status == CommissionStatus.ELIGIBLE

    def test_required_withholds_commission(self, rates):
        strict = rates.model_copy(update={"require_stock_link": True})
        result = calculate(_make_sale(stock_link_present=False), strict)

        assert result.status == CommissionStatus.NOT_ELIGIBLE
        assert result.reason == "no stock link"

    def test_dvs_exempt(self, rates):
        strict = rates.model_copy(update={"require_stock_link": True})
        sale = _make_sale(product_type=SaleType.DVS, stock_link_present=False)
        assert calculate(sale, strict).status == CommissionStatus.ELIGIBLE


# ── SaleFact validation ───────────────────────────────────


class TestSaleFact:
    def test_no_package_with_code_rejected(self):
        with pytest.raises(ValidationError):
            _make_sale(package_selection=PackageSelection.NO_PACKAGE, package_code="COMPACT")

    def test_approved_and_rejected_rejected(self):
        with pytest.raises(ValidationError):
            _make_sale(admin_approved=True, admin_rejected=True)

    def test_frozen(self):
        sale = _make_sale()
        with pytest.raises(ValidationError):
            sale.tl_verified = False

    def test_blank_package_code_becomes_none(self):
        assert _make_sale(package_code="   ").package_code is None


# ── calculate_batch ───────────────────────────────────────


class TestCalculateBatch:
    def test_invalid_sale_becomes_flagged_result(self, rates):
        sales = [
            _make_sale(),
            _make_sale(
                product_type=SaleType.DVS,
                package_selection=PackageSelection.NO_PACKAGE,
                package_code=None,
            ),
        ]
        results = calculate_batch(sales, rates)

        assert len(results) == 2
        assert results[0].status == CommissionStatus.ELIGIBLE
        assert results[1].status == CommissionStatus.NOT_ELIGIBLE
        assert results[1].is_invalid is True
        assert "DVS requires package" in results[1].reason
        assert results[1].breakdown.total_commission == 0

    def test_empty(self, rates):
        assert calculate_batch([], rates) == []
