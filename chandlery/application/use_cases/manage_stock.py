"""Stock row management: create, edit settings, delete."""

from decimal import Decimal

from chandlery.application.conflict_retry import run_with_conflict_retry
from chandlery.application.dto.requests import CreateStockRequest, UpdateStockSettingsRequest
from chandlery.config import get_logger
from chandlery.core.entities.stock import MovementKind, Stock, StockMovement
from chandlery.core.exceptions import DuplicateStockError, StockNotFoundError, ValidationError
from chandlery.core.interfaces.stock_store import IStockStore
from chandlery.core.services.inventory_ledger import validate_movement_quantity
from chandlery.core.services.money import ZERO

logger = get_logger(__name__)


def _validate_minimum(minimum_quantity: Decimal) -> None:
    if minimum_quantity < ZERO:
        raise ValidationError(
            "minimum_quantity", "Minimum quantity must not be negative", minimum_quantity
        )


class CreateStockUseCase:
    """
    Start tracking a catalog item.

    A non-zero opening quantity is booked as an IN movement in the same
    transaction, so the quantity equals the fold of its movements from the
    first moment.
    """

    def __init__(self, stock_store: IStockStore):
        self._stock_store = stock_store

    async def execute(self, request: CreateStockRequest) -> Stock:
        quantity = validate_movement_quantity(request.quantity)
        _validate_minimum(request.minimum_quantity)

        existing = await self._stock_store.get_stock_by_supply_item(request.supply_item_id)
        if existing is not None:
            raise DuplicateStockError(request.supply_item_id, existing.id)

        stock = Stock(
            supply_item_id=request.supply_item_id,
            quantity=quantity,
            unit=request.unit,
            warehouse_location=request.warehouse_location,
            minimum_quantity=request.minimum_quantity,
        )

        opening = None
        if quantity > ZERO:
            opening = StockMovement(
                stock_id=0,  # assigned by the store
                kind=MovementKind.IN,
                quantity=quantity,
                unit=request.unit,
                reference_type="opening_balance",
                reference_info="Opening balance",
            )

        return await self._stock_store.create_stock(stock, opening_movement=opening)


class UpdateStockSettingsUseCase:
    """Edit location and minimum quantity. Quantity only moves via movements."""

    def __init__(self, stock_store: IStockStore, conflict_retries: int = 1):
        self._stock_store = stock_store
        self._conflict_retries = conflict_retries

    async def execute(self, request: UpdateStockSettingsRequest) -> Stock:
        if request.minimum_quantity is not None:
            _validate_minimum(request.minimum_quantity)
        return await run_with_conflict_retry(
            self._apply, self._conflict_retries, request
        )

    async def _apply(self, request: UpdateStockSettingsRequest) -> Stock:
        stock = await self._stock_store.get_stock(request.stock_id)
        if stock is None:
            raise StockNotFoundError(request.stock_id)

        if "warehouse_location" in request.model_fields_set:
            stock.warehouse_location = request.warehouse_location
        if request.minimum_quantity is not None:
            stock.minimum_quantity = request.minimum_quantity

        return await self._stock_store.update_stock_settings(stock)


class DeleteStockUseCase:
    """Delete a stock row together with its movement history."""

    def __init__(self, stock_store: IStockStore):
        self._stock_store = stock_store

    async def execute(self, stock_id: int) -> bool:
        deleted = await self._stock_store.delete_stock(stock_id)
        if not deleted:
            logger.warning("delete_stock_missing", stock_id=stock_id)
        return deleted
