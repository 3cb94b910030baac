"""
Money arithmetic.

The four item-level functions here are the only place cost, revenue,
profit and margin are computed. Order and portfolio totals are sums of
their results. All arithmetic is Decimal; floats are converted through
their string form so 0.1 stays 0.1.
"""

from decimal import Decimal
from typing import Any

from chandlery.core.entities.finance import ItemProfit

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Coerce int/float/str/Decimal to Decimal without binary float drift."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric amount")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(str(value).strip())


def item_cost(buying_price: Any, quantity: Any) -> Decimal:
    return to_decimal(buying_price) * to_decimal(quantity)


def item_revenue(selling_price: Any, quantity: Any) -> Decimal:
    return to_decimal(selling_price) * to_decimal(quantity)


def item_gross_profit(buying_price: Any, selling_price: Any, quantity: Any) -> Decimal:
    return (to_decimal(selling_price) - to_decimal(buying_price)) * to_decimal(quantity)


def margin_percent(buying_price: Any, selling_price: Any) -> Decimal | None:
    """Margin as a percentage of the selling price; None when it is zero."""
    selling = to_decimal(selling_price)
    if selling == ZERO:
        return None
    return (selling - to_decimal(buying_price)) / selling * HUNDRED


def profit_ratio_percent(profit: Decimal, revenue: Decimal) -> Decimal | None:
    """Aggregate margin: profit over revenue; None when revenue is zero."""
    if revenue == ZERO:
        return None
    return profit / revenue * HUNDRED


def item_profit(buying_price: Any, selling_price: Any, quantity: Any) -> ItemProfit:
    """Cost, revenue, profit and margin for a single line item."""
    return ItemProfit(
        total_cost=item_cost(buying_price, quantity),
        total_revenue=item_revenue(selling_price, quantity),
        gross_profit=item_gross_profit(buying_price, selling_price, quantity),
        margin_percent=margin_percent(buying_price, selling_price),
    )
