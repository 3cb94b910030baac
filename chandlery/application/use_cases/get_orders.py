"""Order read use cases."""

from chandlery.core.entities.finance import OrderWithItems
from chandlery.core.entities.order import Order, OrderStatus
from chandlery.core.exceptions import OrderNotFoundError
from chandlery.core.interfaces.order_store import IOrderStore
from chandlery.core.services.order_aggregation import order_totals


class GetOrderWithItemsUseCase:
    """Load an order with its line items and their totals."""

    def __init__(self, order_store: IOrderStore):
        self._order_store = order_store

    async def execute(self, order_id: int) -> OrderWithItems:
        order = await self._order_store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        items = await self._order_store.list_items(order_id)
        return OrderWithItems(
            order=order,
            items=items,
            totals=order_totals(items, order.currency),
        )


class ListOrdersUseCase:
    """List orders newest first, by status or by port call."""

    def __init__(self, order_store: IOrderStore):
        self._order_store = order_store

    async def execute(
        self,
        status: OrderStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Order]:
        return await self._order_store.list_orders(status=status, limit=limit, offset=offset)

    async def by_visit(self, ship_visit_id: int) -> list[Order]:
        return await self._order_store.list_orders_by_visit(ship_visit_id)
