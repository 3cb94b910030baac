"""
Order and portfolio aggregation.

Every total here is a sum of money.item_cost / money.item_revenue results,
so item-level and order-level views can never drift apart. Amounts in
different currencies are never added together: the portfolio summary keeps
one bucket per currency and takes its headline figures from one bucket.
"""

from collections.abc import Iterable, Sequence

from chandlery.core.entities.finance import (
    CurrencyBreakdown,
    OrderProfitInfo,
    OrderTotals,
    ProfitSummary,
    ReportableOrder,
)
from chandlery.core.entities.order import OrderItem
from chandlery.core.services.money import (
    ZERO,
    item_cost,
    item_revenue,
    profit_ratio_percent,
)


def order_totals(items: Sequence[OrderItem], order_currency: str) -> OrderTotals:
    """
    Sum line items into order totals.

    With no items the result is all zeros in ``order_currency``. Otherwise
    the currency is taken from the first item.
    """
    if not items:
        return OrderTotals(item_count=0, currency=order_currency)

    total_cost = sum((item_cost(i.buying_price, i.quantity) for i in items), ZERO)
    total_revenue = sum((item_revenue(i.selling_price, i.quantity) for i in items), ZERO)
    gross_profit = total_revenue - total_cost

    return OrderTotals(
        item_count=len(items),
        total_cost=total_cost,
        total_revenue=total_revenue,
        gross_profit=gross_profit,
        margin_percent=profit_ratio_percent(gross_profit, total_revenue),
        currency=items[0].currency,
    )


def item_currencies(items: Iterable[OrderItem]) -> set[str]:
    """Distinct currencies present on a set of line items."""
    return {i.currency for i in items}


def profit_summary(
    orders: Iterable[ReportableOrder],
    reporting_currency: str,
) -> ProfitSummary:
    """
    Aggregate reportable orders into a dashboard summary.

    Orders without line items are not counted. ``total_orders`` counts
    every remaining order. The monetary headline figures come from a single
    currency bucket: the portfolio's only currency, or ``reporting_currency``
    when several are present (zeros if nothing is booked in it). The
    per-currency breakdown is always filled in.
    """
    buckets: dict[str, CurrencyBreakdown] = {}
    total_orders = 0

    for order in orders:
        if not order.items:
            continue
        totals = order_totals(order.items, order.currency)
        bucket = buckets.setdefault(
            totals.currency, CurrencyBreakdown(currency=totals.currency)
        )
        bucket.order_count += 1
        bucket.total_revenue += totals.total_revenue
        bucket.total_cost += totals.total_cost
        total_orders += 1

    for bucket in buckets.values():
        bucket.total_profit = bucket.total_revenue - bucket.total_cost
        bucket.average_margin = profit_ratio_percent(
            bucket.total_profit, bucket.total_revenue
        )

    currency = next(iter(buckets)) if len(buckets) == 1 else reporting_currency
    headline = buckets.get(currency, CurrencyBreakdown(currency=currency))

    return ProfitSummary(
        total_orders=total_orders,
        total_revenue=headline.total_revenue,
        total_cost=headline.total_cost,
        total_profit=headline.total_profit,
        average_margin=headline.average_margin,
        currency=currency,
        by_currency=sorted(buckets.values(), key=lambda b: b.currency),
    )


def rank_by_profit(
    orders: Iterable[ReportableOrder],
    limit: int,
    unknown_ship_label: str,
) -> list[OrderProfitInfo]:
    """Top ``limit`` orders by revenue minus cost, highest first."""
    if limit <= 0:
        return []

    ranked: list[OrderProfitInfo] = []
    for order in orders:
        if not order.items:
            continue
        totals = order_totals(order.items, order.currency)
        if totals.total_revenue <= ZERO:
            continue
        ranked.append(
            OrderProfitInfo(
                order_id=order.order_id,
                order_number=order.order_number,
                ship_name=order.ship_name or unknown_ship_label,
                total_revenue=totals.total_revenue,
                total_cost=totals.total_cost,
                profit=totals.gross_profit,
                margin_percent=totals.margin_percent,
                currency=order.currency,
            )
        )

    # Stable on ties: earlier order ids first
    ranked.sort(key=lambda r: (-r.profit, r.order_id))
    return ranked[:limit]
