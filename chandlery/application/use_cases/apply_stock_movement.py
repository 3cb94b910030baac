"""Apply Stock Movement Use Case."""

from decimal import Decimal

from chandlery.application.conflict_retry import run_with_conflict_retry
from chandlery.application.dto.requests import StockMovementRequest
from chandlery.config import get_logger
from chandlery.core.entities.stock import StockMovement
from chandlery.core.exceptions import StockNotFoundError
from chandlery.core.interfaces.stock_store import IStockStore
from chandlery.core.services.inventory_ledger import (
    apply_movement,
    is_low_stock,
    is_out_of_stock,
    validate_movement_quantity,
)

logger = get_logger(__name__)


class ApplyStockMovementUseCase:
    """
    Record one inventory event and move the stock quantity accordingly.

    IN and RETURN add, OUT subtracts, ADJUSTMENT sets the quantity to the
    movement amount as a new absolute level. The result never drops below
    zero. The movement row and the new quantity are written in one
    transaction guarded by the stock version; a lost race re-reads the row
    and recomputes.
    """

    def __init__(self, stock_store: IStockStore, conflict_retries: int = 1):
        self._stock_store = stock_store
        self._conflict_retries = conflict_retries

    async def execute(self, request: StockMovementRequest) -> StockMovement:
        quantity = validate_movement_quantity(request.quantity)
        return await run_with_conflict_retry(
            self._apply, self._conflict_retries, request, quantity
        )

    async def _apply(
        self, request: StockMovementRequest, quantity: Decimal
    ) -> StockMovement:
        stock = await self._stock_store.get_stock(request.stock_id)
        if stock is None:
            raise StockNotFoundError(request.stock_id)

        new_quantity = apply_movement(stock.quantity, request.kind, quantity)

        movement = StockMovement(
            stock_id=stock.id,
            kind=request.kind,
            quantity=quantity,
            unit=stock.unit,
            reference_type=request.reference_type,
            reference_id=request.reference_id,
            reference_info=request.reference_info,
            notes=request.notes,
        )
        movement = await self._stock_store.record_movement(
            movement, new_quantity, expected_version=stock.version
        )

        logger.info(
            "stock_movement_applied",
            stock_id=stock.id,
            kind=request.kind.value,
            quantity=str(quantity),
            previous_quantity=str(stock.quantity),
            new_quantity=str(new_quantity),
        )
        if is_out_of_stock(new_quantity):
            logger.warning("stock_out", stock_id=stock.id)
        elif is_low_stock(new_quantity, stock.minimum_quantity):
            logger.warning(
                "stock_low",
                stock_id=stock.id,
                quantity=str(new_quantity),
                minimum=str(stock.minimum_quantity),
            )
        return movement
