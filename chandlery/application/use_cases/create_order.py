"""Create Order Use Case."""

import uuid
from datetime import UTC, datetime

from chandlery.application.dto.requests import CreateOrderRequest
from chandlery.config import get_logger
from chandlery.core.entities.order import Order, OrderStatus, normalize_currency
from chandlery.core.exceptions import ValidationError
from chandlery.core.interfaces.order_store import IOrderStore

logger = get_logger(__name__)


def generate_order_number(prefix: str = "ORD", now: datetime | None = None) -> str:
    """Human-readable order number, e.g. ``ORD-20240315143000-4F2A9C``."""
    now = now or datetime.now(UTC)
    return f"{prefix}-{now.strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:6].upper()}"


class CreateOrderUseCase:
    """Open a new order in status NEW."""

    def __init__(self, order_store: IOrderStore, number_prefix: str = "ORD"):
        self._order_store = order_store
        self._number_prefix = number_prefix

    async def execute(self, request: CreateOrderRequest) -> Order:
        try:
            currency = normalize_currency(request.currency)
        except ValueError as e:
            raise ValidationError("currency", str(e), request.currency) from e

        order = Order(
            order_number=generate_order_number(self._number_prefix),
            ship_id=request.ship_id,
            ship_visit_id=request.ship_visit_id,
            status=OrderStatus.NEW,
            currency=currency,
            delivery_port=request.delivery_port,
            notes=request.notes,
        )
        order = await self._order_store.create_order(order)

        logger.info(
            "create_order_complete",
            order_id=order.id,
            order_number=order.order_number,
        )
        return order
