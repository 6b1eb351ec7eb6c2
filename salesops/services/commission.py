"""
Per-sale commission calculation.

Rules:
- Upfront commission is valued on every sale of a known product type
- Activation and package commission are valued only once the sale is paid
- A paid sale is earned only after TL verification and admin approval
- A sale the admin rejected is never earned
- DVS sales must carry a package; DVS without one is rejected as invalid

The calculator is a pure function of (sale, rates). It never touches the
database and never mutates the rate catalog.
"""

import logging
from typing import Iterable, List

from salesops.models.rates import SaleType
from salesops.schemas.commission import (
    CommissionBreakdown,
    CommissionResult,
    CommissionStatus,
    PackageSelection,
    RateCatalog,
    SaleFact,
)

logger = logging.getLogger(__name__)

REASON_UNPAID = "unpaid"
REASON_NO_STOCK_LINK = "no stock link"
REASON_ADMIN_REJECTED = "admin rejected"


class InvalidInput(ValueError):
    """Sale facts that contradict each other or the rate catalog."""


def calculate(sale: SaleFact, rates: RateCatalog) -> CommissionResult:
    """Evaluate eligibility and commission breakdown for one sale.

    Args:
        sale: Facts about the sale
        rates: Rate catalog snapshot to value the sale against

    Returns:
        CommissionResult with status, optional reason and breakdown

    Raises:
        InvalidInput: product type missing from the catalog, or DVS sold
            without a package
    """
    product_rate = rates.product_rates.get(sale.product_type)
    if product_rate is None:
        raise InvalidInput(f"invalid: no rates for product type {sale.product_type.value}")

    if (
        sale.product_type == SaleType.DVS
        and sale.package_selection == PackageSelection.NO_PACKAGE
    ):
        raise InvalidInput("invalid: DVS requires package")

    # Breakdown is valued regardless of eligibility
    activation = 0
    package = 0
    config_gap = False
    if sale.is_paid:
        activation = product_rate.activation
        if sale.package_selection == PackageSelection.WITH_PACKAGE:
            if rates.has_package_commission(sale.package_code):
                package = rates.resolve_package_commission(sale.package_code)
            else:
                config_gap = True

    breakdown = CommissionBreakdown(
        upfront_amount=product_rate.upfront,
        activation_amount=activation,
        package_amount=package,
    )

    reason = None
    if not sale.is_paid:
        status = CommissionStatus.NOT_ELIGIBLE
        reason = REASON_UNPAID
    elif sale.admin_rejected:
        status = CommissionStatus.NOT_ELIGIBLE
        reason = REASON_ADMIN_REJECTED
    elif (
        rates.require_stock_link
        and not sale.stock_link_present
        and sale.product_type != SaleType.DVS
    ):
        status = CommissionStatus.NOT_ELIGIBLE
        reason = REASON_NO_STOCK_LINK
    elif not (sale.tl_verified and sale.admin_approved):
        status = CommissionStatus.PENDING_APPROVAL
    else:
        status = CommissionStatus.ELIGIBLE

    return CommissionResult(
        sale=sale,
        status=status,
        reason=reason,
        breakdown=breakdown,
        config_gap=config_gap,
    )


def calculate_batch(sales: Iterable[SaleFact], rates: RateCatalog) -> List[CommissionResult]:
    """Calculate every sale; invalid sales become flagged not-eligible results."""
    results = []
    for sale in sales:
        try:
            results.append(calculate(sale, rates))
        except InvalidInput as e:
            logger.warning(f"Invalid sale skipped from commission: {e}")
            results.append(
                CommissionResult(
                    sale=sale,
                    status=CommissionStatus.NOT_ELIGIBLE,
                    reason=str(e),
                    is_invalid=True,
                )
            )
    return results
