"""Revenue and profit arithmetic for products and recorded sales.

Every function here is pure: nothing is read from or written to the
database, and product objects passed in are never modified.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

ZERO = Decimal("0")


def as_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from carrying binary noise into the sums
    return Decimal(str(value))


@dataclass(frozen=True)
class SaleValues:
    total_revenue: Decimal
    total_cost: Decimal
    profit: Decimal


@dataclass(frozen=True)
class SalesSummary:
    total_revenue: Decimal
    total_profit: Decimal
    count: int


def unit_cost(product) -> Decimal:
    return (
        as_decimal(product.cost_price)
        + as_decimal(product.shipping_cost)
        + as_decimal(product.sales_fee)
    )


def estimated_unit_profit(cost_price, shipping_cost, sales_fee, selling_price) -> Decimal:
    return as_decimal(selling_price) - (
        as_decimal(cost_price) + as_decimal(shipping_cost) + as_decimal(sales_fee)
    )


def compute_sale(product: Optional[object], quantity: int) -> SaleValues:
    """Revenue, cost and profit of selling ``quantity`` units of ``product``.

    A missing product (``None``) yields zero for every value instead of an
    error, so a sale can still be recorded against a stale product id.
    """
    if product is None:
        return SaleValues(total_revenue=ZERO, total_cost=ZERO, profit=ZERO)

    qty = as_decimal(quantity)
    total_revenue = as_decimal(product.selling_price) * qty
    total_cost = unit_cost(product) * qty
    return SaleValues(
        total_revenue=total_revenue,
        total_cost=total_cost,
        profit=total_revenue - total_cost,
    )


def aggregate(sales: Iterable[object]) -> SalesSummary:
    total_revenue = ZERO
    total_profit = ZERO
    count = 0
    for sale in sales:
        total_revenue += as_decimal(sale.total_revenue)
        total_profit += as_decimal(sale.profit)
        count += 1
    return SalesSummary(total_revenue=total_revenue, total_profit=total_profit, count=count)


__all__ = [
    "SaleValues",
    "SalesSummary",
    "aggregate",
    "as_decimal",
    "compute_sale",
    "estimated_unit_profit",
    "unit_cost",
]
