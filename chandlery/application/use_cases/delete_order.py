"""Delete Order Use Case."""

from chandlery.config import get_logger
from chandlery.core.interfaces.order_store import IOrderStore

logger = get_logger(__name__)


class DeleteOrderUseCase:
    """Remove an order together with its line items."""

    def __init__(self, order_store: IOrderStore):
        self._order_store = order_store

    async def execute(self, order_id: int) -> bool:
        deleted = await self._order_store.delete_order(order_id)
        if not deleted:
            logger.warning("delete_order_missing", order_id=order_id)
        return deleted
