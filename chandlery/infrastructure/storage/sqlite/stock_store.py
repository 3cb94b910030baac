"""SQLite implementation of warehouse stock storage."""

from datetime import UTC, datetime
from decimal import Decimal

import aiosqlite

from chandlery.config import get_logger
from chandlery.core.entities.stock import MovementKind, Stock, StockMovement
from chandlery.core.exceptions import (
    ConcurrentModificationError,
    DuplicateStockError,
    StockNotFoundError,
)
from chandlery.core.interfaces.stock_store import IStockStore
from chandlery.infrastructure.storage.sqlite.connection import ConnectionPool
from chandlery.infrastructure.storage.sqlite.converters import (
    datetime_from_db,
    datetime_to_db,
    decimal_from_db,
    decimal_to_db,
)

logger = get_logger(__name__)

_STOCK_SELECT = """
    SELECT s.*, si.name AS supply_item_name
    FROM stock s
    LEFT JOIN supply_items si ON si.id = s.supply_item_id
"""

_MOVEMENT_SELECT = """
    SELECT m.*, si.name AS supply_item_name
    FROM stock_movements m
    JOIN stock s ON s.id = m.stock_id
    LEFT JOIN supply_items si ON si.id = s.supply_item_id
"""


class SQLiteStockStore(IStockStore):
    """SQLite implementation of stock rows and the movement ledger."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    async def create_stock(
        self,
        stock: Stock,
        opening_movement: StockMovement | None = None,
    ) -> Stock:
        """
        Create a stock row, optionally with its opening movement.

        A second row for the same catalog item raises DuplicateStockError,
        also when the competing insert committed after the caller's lookup.
        """
        now = datetime.now(UTC)
        async with self.pool.transaction() as conn:
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO stock (
                        supply_item_id, quantity, unit, warehouse_location,
                        minimum_quantity, version, last_updated
                    ) VALUES (?, ?, ?, ?, ?, 1, ?)
                    """,
                    (
                        stock.supply_item_id,
                        decimal_to_db(stock.quantity),
                        stock.unit,
                        stock.warehouse_location,
                        decimal_to_db(stock.minimum_quantity),
                        datetime_to_db(now),
                    ),
                )
            except aiosqlite.IntegrityError:
                # FK failures for unknown supply items stay StorageFailure
                cursor = await conn.execute(
                    "SELECT id FROM stock WHERE supply_item_id = ?",
                    (stock.supply_item_id,),
                )
                row = await cursor.fetchone()
                if row is None:
                    raise
                raise DuplicateStockError(stock.supply_item_id, row["id"]) from None
            stock_id = cursor.lastrowid

            if opening_movement is not None:
                opening_movement.stock_id = stock_id
                await self._insert_movement(conn, opening_movement)

            created = await self._fetch_stock(conn, stock_id)

        logger.info(
            "stock_created",
            stock_id=created.id,
            supply_item_id=created.supply_item_id,
            quantity=str(created.quantity),
        )
        return created

    async def get_stock(self, stock_id: int) -> Stock | None:
        """Get stock by ID."""
        async with self.pool.acquire() as conn:
            return await self._fetch_stock(conn, stock_id)

    async def get_stock_by_supply_item(self, supply_item_id: int) -> Stock | None:
        """Get stock by catalog item ID."""
        async with self.pool.acquire() as conn:
            cursor = await conn.execute(
                _STOCK_SELECT + " WHERE s.supply_item_id = ?", (supply_item_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_stock(row)

    async def list_stock(
        self, limit: int | None = None, offset: int = 0
    ) -> list[Stock]:
        """List stock rows by item name."""
        query = _STOCK_SELECT + " ORDER BY si.name, s.id"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ? OFFSET ?"
            params = (limit, offset)

        async with self.pool.acquire() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_stock(row) for row in rows]

    async def update_stock_settings(self, stock: Stock) -> Stock:
        """Update location and minimum quantity."""
        now = datetime.now(UTC)
        async with self.pool.transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE stock SET
                    warehouse_location = ?,
                    minimum_quantity = ?,
                    last_updated = ?,
                    version = version + 1
                WHERE id = ? AND version = ?
                """,
                (
                    stock.warehouse_location,
                    decimal_to_db(stock.minimum_quantity),
                    datetime_to_db(now),
                    stock.id,
                    stock.version,
                ),
            )
            await self._check_version_hit(conn, cursor.rowcount, stock.id)
            updated = await self._fetch_stock(conn, stock.id)

        logger.info("stock_settings_updated", stock_id=stock.id)
        return updated

    async def record_movement(
        self,
        movement: StockMovement,
        new_quantity: Decimal,
        expected_version: int,
    ) -> StockMovement:
        """Write the new quantity and append the movement in one transaction."""
        now = datetime.now(UTC)
        async with self.pool.transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE stock SET
                    quantity = ?,
                    last_updated = ?,
                    version = version + 1
                WHERE id = ? AND version = ?
                """,
                (
                    decimal_to_db(new_quantity),
                    datetime_to_db(now),
                    movement.stock_id,
                    expected_version,
                ),
            )
            await self._check_version_hit(conn, cursor.rowcount, movement.stock_id)
            movement.created_at = now
            await self._insert_movement(conn, movement)

            cursor = await conn.execute(
                """
                SELECT si.name FROM stock s
                LEFT JOIN supply_items si ON si.id = s.supply_item_id
                WHERE s.id = ?
                """,
                (movement.stock_id,),
            )
            row = await cursor.fetchone()
            movement.supply_item_name = row[0] if row else None

        logger.info(
            "stock_movement_recorded",
            movement_id=movement.id,
            stock_id=movement.stock_id,
            kind=movement.kind.value,
            qty=str(movement.quantity),
        )
        return movement

    async def list_movements(
        self, stock_id: int, limit: int | None = None
    ) -> list[StockMovement]:
        """Movements of one stock row, newest first in commit order."""
        query = _MOVEMENT_SELECT + " WHERE m.stock_id = ? ORDER BY m.id DESC"
        params: tuple = (stock_id,)
        if limit is not None:
            query += " LIMIT ?"
            params = (stock_id, limit)

        async with self.pool.acquire() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def list_recent_movements(self, limit: int = 50) -> list[StockMovement]:
        """Latest movements across the warehouse, in commit order."""
        async with self.pool.acquire() as conn:
            cursor = await conn.execute(
                _MOVEMENT_SELECT + " ORDER BY m.id DESC LIMIT ?",
                (limit,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def delete_stock(self, stock_id: int) -> bool:
        """Delete a stock row together with its movements."""
        async with self.pool.transaction() as conn:
            await conn.execute(
                "DELETE FROM stock_movements WHERE stock_id = ?", (stock_id,)
            )
            cursor = await conn.execute("DELETE FROM stock WHERE id = ?", (stock_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("stock_deleted", stock_id=stock_id)
        return deleted

    async def _fetch_stock(
        self, conn: aiosqlite.Connection, stock_id: int
    ) -> Stock | None:
        cursor = await conn.execute(_STOCK_SELECT + " WHERE s.id = ?", (stock_id,))
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_stock(row)

    @staticmethod
    async def _insert_movement(
        conn: aiosqlite.Connection, movement: StockMovement
    ) -> None:
        cursor = await conn.execute(
            """
            INSERT INTO stock_movements (
                stock_id, movement_type, quantity, unit,
                reference_type, reference_id, reference_info,
                notes, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                movement.stock_id,
                movement.kind.value,
                decimal_to_db(movement.quantity),
                movement.unit,
                movement.reference_type,
                movement.reference_id,
                movement.reference_info,
                movement.notes,
                datetime_to_db(movement.created_at),
            ),
        )
        movement.id = cursor.lastrowid

    @staticmethod
    async def _check_version_hit(
        conn: aiosqlite.Connection, rowcount: int, stock_id: int
    ) -> None:
        if rowcount > 0:
            return
        cursor = await conn.execute("SELECT 1 FROM stock WHERE id = ?", (stock_id,))
        if await cursor.fetchone() is None:
            raise StockNotFoundError(stock_id)
        raise ConcurrentModificationError("Stock", stock_id)

    @staticmethod
    def _row_to_stock(row: aiosqlite.Row) -> Stock:
        """Convert database row to Stock."""
        return Stock(
            id=row["id"],
            supply_item_id=row["supply_item_id"],
            supply_item_name=row["supply_item_name"],
            quantity=decimal_from_db(row["quantity"]),
            unit=row["unit"],
            warehouse_location=row["warehouse_location"],
            minimum_quantity=decimal_from_db(row["minimum_quantity"]),
            version=row["version"],
            last_updated=datetime_from_db(row["last_updated"]),
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> StockMovement:
        """Convert database row to StockMovement."""
        return StockMovement(
            id=row["id"],
            stock_id=row["stock_id"],
            supply_item_name=row["supply_item_name"],
            kind=MovementKind.from_token(row["movement_type"]),
            quantity=decimal_from_db(row["quantity"]),
            unit=row["unit"],
            reference_type=row["reference_type"],
            reference_id=row["reference_id"],
            reference_info=row["reference_info"],
            notes=row["notes"],
            created_at=datetime_from_db(row["created_at"]),
        )
