"""
Map stored sale rows into engine SaleFacts.

Rows come either as ORM objects (salesops.models.Sale) or as plain mappings
from raw queries. Stored values are loosely typed: package_option holds the
labels "Package" / "No Package", flags and payment status may be NULL.
"""

from collections.abc import Mapping
from typing import Any, Optional

from salesops.models.rates import SaleType
from salesops.schemas.commission import PackageSelection, SaleFact, SalePaymentStatus
from salesops.services.commission import InvalidInput


def _field(row: Any, name: str, default: Any = None) -> Any:
    if isinstance(row, Mapping):
        return row.get(name, default)
    return getattr(row, name, default)


def _enum_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(getattr(value, "value", value)).strip()


def _parse_sale_type(value: Any) -> SaleType:
    raw = _enum_value(value)
    try:
        return SaleType((raw or "").upper())
    except ValueError:
        raise InvalidInput(f"invalid: unknown sale type {raw!r}")


def _parse_package_selection(option: Any, package_code: Optional[str]) -> PackageSelection:
    label = (_enum_value(option) or "").lower().replace("_", " ")
    if label == "no package":
        return PackageSelection.NO_PACKAGE
    if label == "package":
        return PackageSelection.WITH_PACKAGE
    # Option not recorded: infer from the package code
    if package_code:
        return PackageSelection.WITH_PACKAGE
    return PackageSelection.NO_PACKAGE


def _parse_payment_status(value: Any) -> SalePaymentStatus:
    if (_enum_value(value) or "").lower() == SalePaymentStatus.PAID.value:
        return SalePaymentStatus.PAID
    return SalePaymentStatus.UNPAID


def sale_fact_from_row(row: Any) -> SaleFact:
    """Build a SaleFact from a stored sale row.

    Raises:
        InvalidInput: the row's sale type is not a known product type
    """
    product_type = _parse_sale_type(_field(row, "sale_type"))

    package_code = _field(row, "dstv_package")
    if isinstance(package_code, str):
        package_code = package_code.strip() or None
    selection = _parse_package_selection(_field(row, "package_option"), package_code)
    if selection == PackageSelection.NO_PACKAGE:
        # Stale package codes on "No Package" rows are ignored
        package_code = None

    stock_id = _field(row, "stock_id")
    # NULL means approval is still outstanding; a stored False is a rejection
    admin_approved = _field(row, "admin_approved")

    return SaleFact(
        product_type=product_type,
        package_selection=selection,
        package_code=package_code,
        payment_status=_parse_payment_status(_field(row, "payment_status")),
        tl_verified=bool(_field(row, "tl_verified")),
        admin_approved=bool(admin_approved),
        admin_rejected=admin_approved is False,
        stock_link_present=bool(stock_id),
    )
