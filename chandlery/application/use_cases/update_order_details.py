"""Update Order Details Use Case."""

from chandlery.application.conflict_retry import run_with_conflict_retry
from chandlery.application.dto.requests import UpdateOrderDetailsRequest
from chandlery.config import get_logger
from chandlery.core.entities.order import Order
from chandlery.core.exceptions import OrderNotFoundError
from chandlery.core.interfaces.order_store import IOrderStore

logger = get_logger(__name__)

_EDITABLE_FIELDS = ("delivery_port", "notes", "ship_visit_id")


class UpdateOrderDetailsUseCase:
    """
    Edit delivery port, notes and visit link.

    Only fields explicitly present on the request are applied, so passing
    ``notes=None`` clears the notes while omitting it leaves them alone.
    """

    def __init__(self, order_store: IOrderStore, conflict_retries: int = 1):
        self._order_store = order_store
        self._conflict_retries = conflict_retries

    async def execute(self, request: UpdateOrderDetailsRequest) -> Order:
        return await run_with_conflict_retry(
            self._apply, self._conflict_retries, request
        )

    async def _apply(self, request: UpdateOrderDetailsRequest) -> Order:
        order = await self._order_store.get_order(request.order_id)
        if order is None:
            raise OrderNotFoundError(request.order_id)

        changed = [f for f in _EDITABLE_FIELDS if f in request.model_fields_set]
        for field in changed:
            setattr(order, field, getattr(request, field))

        order = await self._order_store.update_order_details(order)
        logger.info("order_details_updated", order_id=order.id, fields=changed)
        return order
