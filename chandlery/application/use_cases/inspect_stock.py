"""Stock read use cases: lookups, low-stock listing, summary, ledger replay."""

from decimal import Decimal

from chandlery.config import get_logger
from chandlery.core.entities.stock import Stock, StockMovement, StockSummary, StockWithMovements
from chandlery.core.exceptions import StockNotFoundError
from chandlery.core.interfaces.stock_store import IStockStore
from chandlery.core.services.inventory_ledger import (
    fold_movements,
    is_low_stock,
    is_out_of_stock,
)

logger = get_logger(__name__)


class GetStockUseCase:
    """Point lookups of stock rows."""

    def __init__(self, stock_store: IStockStore):
        self._stock_store = stock_store

    async def execute(self, stock_id: int) -> Stock:
        stock = await self._stock_store.get_stock(stock_id)
        if stock is None:
            raise StockNotFoundError(stock_id)
        return stock

    async def by_supply_item(self, supply_item_id: int) -> Stock | None:
        return await self._stock_store.get_stock_by_supply_item(supply_item_id)

    async def with_movements(
        self, stock_id: int, limit: int | None = None
    ) -> StockWithMovements:
        stock = await self.execute(stock_id)
        movements = await self._stock_store.list_movements(stock_id, limit=limit)
        return StockWithMovements(stock=stock, movements=movements)


class ListStockUseCase:
    """Stock listings."""

    def __init__(self, stock_store: IStockStore):
        self._stock_store = stock_store

    async def execute(self, limit: int | None = None, offset: int = 0) -> list[Stock]:
        return await self._stock_store.list_stock(limit=limit, offset=offset)

    async def low_stock(self) -> list[Stock]:
        """Rows at or below their minimum (empty ones included), biggest shortfall first."""
        rows = await self._stock_store.list_stock()
        low = [s for s in rows if s.quantity <= s.minimum_quantity]
        low.sort(key=lambda s: (s.quantity - s.minimum_quantity, s.id))
        return low


class ListMovementsUseCase:
    """Movement history reads."""

    def __init__(self, stock_store: IStockStore):
        self._stock_store = stock_store

    async def execute(self, stock_id: int, limit: int | None = None) -> list[StockMovement]:
        if await self._stock_store.get_stock(stock_id) is None:
            raise StockNotFoundError(stock_id)
        return await self._stock_store.list_movements(stock_id, limit=limit)

    async def recent(self, limit: int = 50) -> list[StockMovement]:
        return await self._stock_store.list_recent_movements(limit=limit)


class StockSummaryUseCase:
    """Warehouse dashboard counters, computed from the ledger predicates."""

    def __init__(self, stock_store: IStockStore):
        self._stock_store = stock_store

    async def execute(self) -> StockSummary:
        rows = await self._stock_store.list_stock()
        return StockSummary(
            total_items=len(rows),
            low_stock_count=sum(
                1 for s in rows if is_low_stock(s.quantity, s.minimum_quantity)
            ),
            out_of_stock_count=sum(1 for s in rows if is_out_of_stock(s.quantity)),
        )


class ReplayStockQuantityUseCase:
    """Recompute a stock quantity by folding its persisted movement history."""

    def __init__(self, stock_store: IStockStore):
        self._stock_store = stock_store

    async def execute(self, stock_id: int) -> Decimal:
        stock = await self._stock_store.get_stock(stock_id)
        if stock is None:
            raise StockNotFoundError(stock_id)

        movements = await self._stock_store.list_movements(stock_id)
        replayed = fold_movements((m.kind, m.quantity) for m in reversed(movements))

        if replayed != stock.quantity:
            logger.warning(
                "stock_ledger_drift",
                stock_id=stock_id,
                on_hand=str(stock.quantity),
                replayed=str(replayed),
            )
        return replayed
