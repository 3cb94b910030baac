"""SQLite implementation of order storage."""

from datetime import UTC, datetime

import aiosqlite

from chandlery.config import get_logger
from chandlery.core.entities.order import DeliveryType, Order, OrderItem, OrderStatus
from chandlery.core.exceptions import (
    ConcurrentModificationError,
    OrderItemNotFoundError,
    OrderLockedError,
    OrderNotFoundError,
)
from chandlery.core.interfaces.order_store import IOrderStore
from chandlery.core.services.order_state_machine import is_terminal
from chandlery.infrastructure.storage.sqlite.connection import ConnectionPool
from chandlery.infrastructure.storage.sqlite.converters import (
    date_from_db,
    date_to_db,
    datetime_from_db,
    datetime_to_db,
    decimal_from_db,
    decimal_to_db,
)

logger = get_logger(__name__)

# Ship name and a readable port-call label come along with every order read.
_ORDER_SELECT = """
    SELECT
        o.*,
        s.name AS ship_name,
        v.port_name || ' (' || v.eta || ' - ' || v.etd || ')' AS ship_visit_info
    FROM orders o
    LEFT JOIN ships s ON s.id = o.ship_id
    LEFT JOIN ship_visits v ON v.id = o.ship_visit_id
"""


class SQLiteOrderStore(IOrderStore):
    """SQLite implementation of order and line item storage."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    async def create_order(self, order: Order) -> Order:
        """Create a new order."""
        now = datetime.now(UTC)
        async with self.pool.transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO orders (
                    order_number, ship_id, ship_visit_id, status,
                    delivery_port, currency, notes, version,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, 1, ?, ?)
                """,
                (
                    order.order_number,
                    order.ship_id,
                    order.ship_visit_id,
                    order.status.token,
                    order.delivery_port,
                    order.currency,
                    order.notes,
                    datetime_to_db(now),
                    datetime_to_db(now),
                ),
            )
            created = await self._fetch_order(conn, cursor.lastrowid)

        logger.info(
            "order_created",
            order_id=created.id,
            order_number=created.order_number,
            ship_id=created.ship_id,
        )
        return created

    async def get_order(self, order_id: int) -> Order | None:
        """Get order by ID."""
        async with self.pool.acquire() as conn:
            return await self._fetch_order(conn, order_id)

    async def list_orders(
        self,
        status: OrderStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Order]:
        """List orders, newest first."""
        query = _ORDER_SELECT
        params: list = []
        if status is not None:
            query += " WHERE o.status = ?"
            params.append(status.token)
        query += " ORDER BY o.created_at DESC, o.id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        async with self.pool.acquire() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_order(row) for row in rows]

    async def list_orders_by_visit(self, ship_visit_id: int) -> list[Order]:
        """List orders of one port call."""
        async with self.pool.acquire() as conn:
            cursor = await conn.execute(
                _ORDER_SELECT
                + " WHERE o.ship_visit_id = ? ORDER BY o.created_at DESC, o.id DESC",
                (ship_visit_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_order(row) for row in rows]

    async def update_order_details(self, order: Order) -> Order:
        """Update delivery port, notes and visit link."""
        now = datetime.now(UTC)
        async with self.pool.transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE orders SET
                    ship_visit_id = ?,
                    delivery_port = ?,
                    notes = ?,
                    updated_at = ?,
                    version = version + 1
                WHERE id = ? AND version = ?
                """,
                (
                    order.ship_visit_id,
                    order.delivery_port,
                    order.notes,
                    datetime_to_db(now),
                    order.id,
                    order.version,
                ),
            )
            await self._check_version_hit(conn, cursor.rowcount, order.id)
            updated = await self._fetch_order(conn, order.id)

        logger.info("order_details_updated", order_id=order.id, version=updated.version)
        return updated

    async def update_order_status(
        self,
        order_id: int,
        status: OrderStatus,
        expected_version: int,
    ) -> Order:
        """Set a new status, guarded by the order version."""
        now = datetime.now(UTC)
        async with self.pool.transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE orders SET
                    status = ?,
                    updated_at = ?,
                    version = version + 1
                WHERE id = ? AND version = ?
                """,
                (status.token, datetime_to_db(now), order_id, expected_version),
            )
            await self._check_version_hit(conn, cursor.rowcount, order_id)
            updated = await self._fetch_order(conn, order_id)

        logger.info(
            "order_status_persisted",
            order_id=order_id,
            status=status.token,
            version=updated.version,
        )
        return updated

    async def delete_order(self, order_id: int) -> bool:
        """Delete an order and its line items."""
        async with self.pool.transaction() as conn:
            await conn.execute(
                "DELETE FROM order_items WHERE order_id = ?", (order_id,)
            )
            cursor = await conn.execute(
                "DELETE FROM orders WHERE id = ?", (order_id,)
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("order_deleted", order_id=order_id)
        return deleted

    async def add_item(self, item: OrderItem) -> OrderItem:
        """Insert a line item unless its order is terminal."""
        now = datetime.now(UTC)
        item.created_at = now
        item.updated_at = now
        async with self.pool.transaction() as conn:
            await self._ensure_items_editable(conn, item.order_id)
            cursor = await conn.execute(
                """
                INSERT INTO order_items (
                    order_id, product_name, impa_code, description,
                    quantity, unit, buying_price, selling_price, currency,
                    delivery_type, warehouse_delivery_date, ship_delivery_date,
                    notes, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.order_id,
                    item.product_name,
                    item.impa_code,
                    item.description,
                    decimal_to_db(item.quantity),
                    item.unit,
                    decimal_to_db(item.buying_price),
                    decimal_to_db(item.selling_price),
                    item.currency,
                    item.delivery_type.value,
                    date_to_db(item.warehouse_delivery_date),
                    date_to_db(item.ship_delivery_date),
                    item.notes,
                    datetime_to_db(item.created_at),
                    datetime_to_db(item.updated_at),
                ),
            )
            item.id = cursor.lastrowid

        logger.info(
            "order_item_added",
            item_id=item.id,
            order_id=item.order_id,
            product=item.product_name,
        )
        return item

    async def get_item(self, item_id: int) -> OrderItem | None:
        """Get a line item by ID."""
        async with self.pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT * FROM order_items WHERE id = ?", (item_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_item(row)

    async def list_items(self, order_id: int) -> list[OrderItem]:
        """Line items of one order."""
        async with self.pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT * FROM order_items WHERE order_id = ? ORDER BY id",
                (order_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_item(row) for row in rows]

    async def update_item(self, item: OrderItem) -> OrderItem:
        """Persist an edited line item unless its order is terminal."""
        item.updated_at = datetime.now(UTC)
        async with self.pool.transaction() as conn:
            await self._ensure_items_editable(conn, item.order_id)
            cursor = await conn.execute(
                """
                UPDATE order_items SET
                    product_name = ?,
                    impa_code = ?,
                    description = ?,
                    quantity = ?,
                    unit = ?,
                    buying_price = ?,
                    selling_price = ?,
                    currency = ?,
                    delivery_type = ?,
                    warehouse_delivery_date = ?,
                    ship_delivery_date = ?,
                    notes = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    item.product_name,
                    item.impa_code,
                    item.description,
                    decimal_to_db(item.quantity),
                    item.unit,
                    decimal_to_db(item.buying_price),
                    decimal_to_db(item.selling_price),
                    item.currency,
                    item.delivery_type.value,
                    date_to_db(item.warehouse_delivery_date),
                    date_to_db(item.ship_delivery_date),
                    item.notes,
                    datetime_to_db(item.updated_at),
                    item.id,
                ),
            )
            if cursor.rowcount == 0:
                raise OrderItemNotFoundError(item.id)

        logger.info("order_item_updated", item_id=item.id, order_id=item.order_id)
        return item

    async def delete_item(self, item_id: int) -> bool:
        """Delete a line item unless its order is terminal."""
        async with self.pool.transaction() as conn:
            cursor = await conn.execute(
                "SELECT order_id FROM order_items WHERE id = ?", (item_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return False
            await self._ensure_items_editable(conn, row["order_id"])
            cursor = await conn.execute(
                "DELETE FROM order_items WHERE id = ?", (item_id,)
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("order_item_deleted", item_id=item_id)
        return deleted

    async def _fetch_order(
        self, conn: aiosqlite.Connection, order_id: int
    ) -> Order | None:
        cursor = await conn.execute(_ORDER_SELECT + " WHERE o.id = ?", (order_id,))
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_order(row)

    @staticmethod
    async def _ensure_items_editable(
        conn: aiosqlite.Connection, order_id: int
    ) -> None:
        """
        Re-read the order status inside the write transaction.

        BEGIN IMMEDIATE serializes this with status changes, so an order
        that turned terminal after the caller's check still locks its items.
        """
        cursor = await conn.execute(
            "SELECT status FROM orders WHERE id = ?", (order_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            raise OrderNotFoundError(order_id)
        status = OrderStatus.from_token(row["status"])
        if is_terminal(status):
            raise OrderLockedError(order_id, status.token)

    @staticmethod
    async def _check_version_hit(
        conn: aiosqlite.Connection, rowcount: int, order_id: int
    ) -> None:
        """Tell a missing order apart from a lost optimistic race."""
        if rowcount > 0:
            return
        cursor = await conn.execute("SELECT 1 FROM orders WHERE id = ?", (order_id,))
        if await cursor.fetchone() is None:
            raise OrderNotFoundError(order_id)
        raise ConcurrentModificationError("Order", order_id)

    @staticmethod
    def _row_to_order(row: aiosqlite.Row) -> Order:
        """Convert database row to Order."""
        return Order(
            id=row["id"],
            order_number=row["order_number"],
            ship_id=row["ship_id"],
            ship_name=row["ship_name"],
            ship_visit_id=row["ship_visit_id"],
            ship_visit_info=row["ship_visit_info"],
            status=OrderStatus.from_token(row["status"]),
            currency=row["currency"],
            delivery_port=row["delivery_port"],
            notes=row["notes"],
            version=row["version"],
            created_at=datetime_from_db(row["created_at"]),
            updated_at=datetime_from_db(row["updated_at"]),
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> OrderItem:
        """Convert database row to OrderItem."""
        return OrderItem(
            id=row["id"],
            order_id=row["order_id"],
            product_name=row["product_name"],
            impa_code=row["impa_code"],
            description=row["description"],
            quantity=decimal_from_db(row["quantity"]),
            unit=row["unit"],
            buying_price=decimal_from_db(row["buying_price"]),
            selling_price=decimal_from_db(row["selling_price"]),
            currency=row["currency"],
            delivery_type=DeliveryType.from_token(row["delivery_type"]),
            warehouse_delivery_date=date_from_db(row["warehouse_delivery_date"]),
            ship_delivery_date=date_from_db(row["ship_delivery_date"]),
            notes=row["notes"],
            created_at=datetime_from_db(row["created_at"]),
            updated_at=datetime_from_db(row["updated_at"]),
        )
