"""SQLite reads backing the profit reports."""

from collections import defaultdict

from chandlery.config import get_logger
from chandlery.core.entities.finance import ReportableOrder
from chandlery.core.entities.order import OrderItem, OrderStatus
from chandlery.core.interfaces.report_store import IReportStore
from chandlery.infrastructure.storage.sqlite.connection import ConnectionPool
from chandlery.infrastructure.storage.sqlite.order_store import SQLiteOrderStore

logger = get_logger(__name__)


class SQLiteReportStore(IReportStore):
    """
    Loads orders with their line items for portfolio reporting.

    Amounts are aggregated by the caller in Decimal; SQL only filters
    and joins.
    """

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    async def list_reportable_orders(self) -> list[ReportableOrder]:
        """Non-cancelled orders with at least one line item."""
        async with self.pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT o.id, o.order_number, o.currency, s.name AS ship_name
                FROM orders o
                LEFT JOIN ships s ON s.id = o.ship_id
                WHERE o.status != ?
                  AND EXISTS (SELECT 1 FROM order_items i WHERE i.order_id = o.id)
                ORDER BY o.id
                """,
                (OrderStatus.CANCELLED.token,),
            )
            order_rows = await cursor.fetchall()

            cursor = await conn.execute(
                """
                SELECT i.* FROM order_items i
                JOIN orders o ON o.id = i.order_id
                WHERE o.status != ?
                ORDER BY i.order_id, i.id
                """,
                (OrderStatus.CANCELLED.token,),
            )
            item_rows = await cursor.fetchall()

        items_by_order: dict[int, list[OrderItem]] = defaultdict(list)
        for row in item_rows:
            items_by_order[row["order_id"]].append(SQLiteOrderStore._row_to_item(row))

        orders = [
            ReportableOrder(
                order_id=row["id"],
                order_number=row["order_number"],
                ship_name=row["ship_name"],
                currency=row["currency"],
                items=items_by_order.get(row["id"], []),
            )
            for row in order_rows
        ]
        logger.debug("reportable_orders_loaded", count=len(orders))
        return orders
