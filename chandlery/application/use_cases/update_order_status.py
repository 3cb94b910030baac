"""Update Order Status Use Case: the only path that changes an order's status."""

from chandlery.application.conflict_retry import run_with_conflict_retry
from chandlery.application.dto.requests import UpdateOrderStatusRequest
from chandlery.config import get_logger
from chandlery.core.entities.order import Order, OrderStatus
from chandlery.core.exceptions import OrderNotFoundError
from chandlery.core.interfaces.order_store import IOrderStore
from chandlery.core.services.order_state_machine import ensure_transition

logger = get_logger(__name__)


class UpdateOrderStatusUseCase:
    """
    Read the order, ask the state machine, persist the new status.

    The write is guarded by the order version, so two concurrent requests
    from the same source status cannot both succeed. A lost race is
    re-evaluated against the fresh status ``conflict_retries`` times.
    """

    def __init__(self, order_store: IOrderStore, conflict_retries: int = 1):
        self._order_store = order_store
        self._conflict_retries = conflict_retries

    async def execute(self, request: UpdateOrderStatusRequest) -> Order:
        return await run_with_conflict_retry(
            self._transition,
            self._conflict_retries,
            request.order_id,
            request.status,
        )

    async def _transition(self, order_id: int, target: OrderStatus) -> Order:
        order = await self._order_store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        ensure_transition(order.status, target)

        updated = await self._order_store.update_order_status(
            order_id, target, expected_version=order.version
        )
        logger.info(
            "order_status_changed",
            order_id=order_id,
            from_status=order.status.token,
            to_status=target.token,
        )
        return updated
