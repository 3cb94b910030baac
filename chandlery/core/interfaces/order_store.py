"""Abstract interface for order storage."""

from abc import ABC, abstractmethod

from chandlery.core.entities.order import Order, OrderItem, OrderStatus


class IOrderStore(ABC):
    """Interface for order and line item persistence."""

    @abstractmethod
    async def create_order(self, order: Order) -> Order:
        """Insert a new order and return it with its id."""
        pass

    @abstractmethod
    async def get_order(self, order_id: int) -> Order | None:
        """Get order by ID, with ship and visit info joined."""
        pass

    @abstractmethod
    async def list_orders(
        self,
        status: OrderStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Order]:
        """List orders newest first, optionally filtered by status."""
        pass

    @abstractmethod
    async def list_orders_by_visit(self, ship_visit_id: int) -> list[Order]:
        """List orders linked to a port call, newest first."""
        pass

    @abstractmethod
    async def update_order_details(self, order: Order) -> Order:
        """
        Persist delivery port, notes and visit link.

        Guarded by ``order.version``; raises ConcurrentModificationError
        when the row changed since it was read.
        """
        pass

    @abstractmethod
    async def update_order_status(
        self,
        order_id: int,
        status: OrderStatus,
        expected_version: int,
    ) -> Order:
        """
        Persist a new status and updated timestamp.

        Raises ConcurrentModificationError when the stored version is no
        longer ``expected_version``.
        """
        pass

    @abstractmethod
    async def delete_order(self, order_id: int) -> bool:
        """Delete line items then the order, in one transaction."""
        pass

    @abstractmethod
    async def add_item(self, item: OrderItem) -> OrderItem:
        """Insert a line item; raises OrderLockedError once the order is terminal."""
        pass

    @abstractmethod
    async def get_item(self, item_id: int) -> OrderItem | None:
        """Get a line item by ID."""
        pass

    @abstractmethod
    async def list_items(self, order_id: int) -> list[OrderItem]:
        """All line items of an order, in insertion order."""
        pass

    @abstractmethod
    async def update_item(self, item: OrderItem) -> OrderItem:
        """Persist an edited line item; raises OrderLockedError once the order is terminal."""
        pass

    @abstractmethod
    async def delete_item(self, item_id: int) -> bool:
        """Delete a line item; raises OrderLockedError once the order is terminal."""
        pass
