"""Line item use cases: add, edit and delete priced products on an order."""

from decimal import Decimal

from chandlery.application.dto.requests import AddOrderItemRequest, UpdateOrderItemRequest
from chandlery.config import get_logger
from chandlery.core.entities.order import Order, OrderItem, normalize_currency
from chandlery.core.exceptions import (
    CurrencyMismatchError,
    OrderItemNotFoundError,
    OrderLockedError,
    OrderNotFoundError,
    ValidationError,
)
from chandlery.core.interfaces.order_store import IOrderStore
from chandlery.core.services.money import ZERO
from chandlery.core.services.order_state_machine import is_terminal

logger = get_logger(__name__)

# Optional columns a partial update may clear by sending an explicit None
_CLEARABLE_FIELDS = (
    "impa_code",
    "description",
    "warehouse_delivery_date",
    "ship_delivery_date",
    "notes",
)
_REQUIRED_FIELDS = (
    "product_name",
    "quantity",
    "unit",
    "buying_price",
    "selling_price",
    "delivery_type",
)


async def _load_unlocked_order(order_store: IOrderStore, order_id: int) -> Order:
    order = await order_store.get_order(order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    if is_terminal(order.status):
        raise OrderLockedError(order_id, order.status.token)
    return order


def _resolve_currency(order: Order, requested: str | None) -> str:
    """Line items carry their order's currency; anything else is rejected."""
    if requested is None:
        return order.currency
    try:
        currency = normalize_currency(requested)
    except ValueError as e:
        raise ValidationError("currency", str(e), requested) from e
    if currency != order.currency:
        raise CurrencyMismatchError(order.currency, currency)
    return currency


def _validate_amounts(quantity: Decimal, buying_price: Decimal, selling_price: Decimal) -> None:
    if quantity <= ZERO:
        raise ValidationError("quantity", "Quantity must be positive", quantity)
    if buying_price < ZERO:
        raise ValidationError("buying_price", "Price must not be negative", buying_price)
    if selling_price < ZERO:
        raise ValidationError("selling_price", "Price must not be negative", selling_price)


class AddOrderItemUseCase:
    """Add a line item to a non-terminal order."""

    def __init__(self, order_store: IOrderStore):
        self._order_store = order_store

    async def execute(self, request: AddOrderItemRequest) -> OrderItem:
        order = await _load_unlocked_order(self._order_store, request.order_id)
        currency = _resolve_currency(order, request.currency)
        _validate_amounts(request.quantity, request.buying_price, request.selling_price)

        item = OrderItem(
            order_id=order.id,
            product_name=request.product_name,
            impa_code=request.impa_code,
            description=request.description,
            quantity=request.quantity,
            unit=request.unit,
            buying_price=request.buying_price,
            selling_price=request.selling_price,
            currency=currency,
            delivery_type=request.delivery_type,
            warehouse_delivery_date=request.warehouse_delivery_date,
            ship_delivery_date=request.ship_delivery_date,
            notes=request.notes,
        )
        return await self._order_store.add_item(item)


class UpdateOrderItemUseCase:
    """Edit a line item of a non-terminal order."""

    def __init__(self, order_store: IOrderStore):
        self._order_store = order_store

    async def execute(self, request: UpdateOrderItemRequest) -> OrderItem:
        item = await self._order_store.get_item(request.item_id)
        if item is None:
            raise OrderItemNotFoundError(request.item_id)

        order = await _load_unlocked_order(self._order_store, item.order_id)

        for field in _REQUIRED_FIELDS:
            value = getattr(request, field)
            if value is not None:
                setattr(item, field, value)
        for field in _CLEARABLE_FIELDS:
            if field in request.model_fields_set:
                setattr(item, field, getattr(request, field))

        if request.currency is not None:
            item.currency = _resolve_currency(order, request.currency)
        _validate_amounts(item.quantity, item.buying_price, item.selling_price)

        return await self._order_store.update_item(item)


class DeleteOrderItemUseCase:
    """Delete a line item of a non-terminal order."""

    def __init__(self, order_store: IOrderStore):
        self._order_store = order_store

    async def execute(self, item_id: int) -> bool:
        item = await self._order_store.get_item(item_id)
        if item is None:
            logger.warning("delete_order_item_missing", item_id=item_id)
            return False

        await _load_unlocked_order(self._order_store, item.order_id)
        return await self._order_store.delete_item(item_id)
