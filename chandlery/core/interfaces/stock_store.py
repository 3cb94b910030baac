"""Abstract interface for warehouse stock storage."""

from abc import ABC, abstractmethod
from decimal import Decimal

from chandlery.core.entities.stock import Stock, StockMovement


class IStockStore(ABC):
    """Interface for stock rows and their movement ledger."""

    @abstractmethod
    async def create_stock(
        self,
        stock: Stock,
        opening_movement: StockMovement | None = None,
    ) -> Stock:
        """
        Insert a stock row.

        When ``opening_movement`` is given it is recorded against the new
        row in the same transaction.
        """
        pass

    @abstractmethod
    async def get_stock(self, stock_id: int) -> Stock | None:
        """Get stock by ID."""
        pass

    @abstractmethod
    async def get_stock_by_supply_item(self, supply_item_id: int) -> Stock | None:
        """Get stock by catalog item ID."""
        pass

    @abstractmethod
    async def list_stock(
        self, limit: int | None = None, offset: int = 0
    ) -> list[Stock]:
        """List stock rows ordered by item name; ``limit=None`` returns all."""
        pass

    @abstractmethod
    async def update_stock_settings(self, stock: Stock) -> Stock:
        """
        Persist location and minimum quantity. Never touches quantity.

        Guarded by ``stock.version``.
        """
        pass

    @abstractmethod
    async def record_movement(
        self,
        movement: StockMovement,
        new_quantity: Decimal,
        expected_version: int,
    ) -> StockMovement:
        """
        Append a movement and set the stock quantity, atomically.

        Both writes commit together or not at all. Raises
        ConcurrentModificationError when the stock row's version is no
        longer ``expected_version``.
        """
        pass

    @abstractmethod
    async def list_movements(
        self, stock_id: int, limit: int | None = None
    ) -> list[StockMovement]:
        """Movements of one stock row, newest first."""
        pass

    @abstractmethod
    async def list_recent_movements(self, limit: int = 50) -> list[StockMovement]:
        """Latest movements across all stock rows."""
        pass

    @abstractmethod
    async def delete_stock(self, stock_id: int) -> bool:
        """Delete movements then the stock row, in one transaction."""
        pass
