"""Compute Order Totals Use Case."""

from typing import Any

from chandlery.config import get_logger
from chandlery.core.entities.finance import ItemProfit, OrderTotals
from chandlery.core.exceptions import OrderNotFoundError
from chandlery.core.interfaces.order_store import IOrderStore
from chandlery.core.services.money import item_profit
from chandlery.core.services.order_aggregation import item_currencies, order_totals

logger = get_logger(__name__)


def compute_item_profit(buying_price: Any, selling_price: Any, quantity: Any) -> ItemProfit:
    """Profit figures for one prospective line item. No storage involved."""
    return item_profit(buying_price, selling_price, quantity)


class ComputeOrderTotalsUseCase:
    """
    Sum an order's line items.

    An order with no items yields zero totals in the order's own currency.
    When the order row itself is missing the zero totals carry
    ``fallback_currency``, unless the caller asks for ``require_order``.
    """

    def __init__(self, order_store: IOrderStore, fallback_currency: str = "USD"):
        self._order_store = order_store
        self._fallback_currency = fallback_currency

    async def execute(self, order_id: int, require_order: bool = False) -> OrderTotals:
        order = await self._order_store.get_order(order_id)
        if order is None:
            if require_order:
                raise OrderNotFoundError(order_id)
            logger.warning(
                "order_totals_order_missing",
                order_id=order_id,
                currency=self._fallback_currency,
            )
            currency = self._fallback_currency
        else:
            currency = order.currency

        items = await self._order_store.list_items(order_id)

        currencies = item_currencies(items)
        if len(currencies) > 1:
            logger.warning(
                "order_totals_mixed_currency",
                order_id=order_id,
                currencies=sorted(currencies),
            )

        return order_totals(items, currency)
