"""
Domain exceptions for the chandlery core.

Every error carries a stable ``code`` and a ``details`` mapping so callers
can render a meaningful message without parsing the text.
"""

from typing import Any


class ChandleryError(Exception):
    """Base exception for all chandlery errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Lookup Exceptions
class NotFoundError(ChandleryError):
    """Entity identifier does not resolve."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code="NOT_FOUND",
            details={"entity": entity, "id": entity_id},
        )


class OrderNotFoundError(NotFoundError):
    """Order not found in storage."""

    def __init__(self, order_id: int):
        super().__init__("Order", order_id)


class OrderItemNotFoundError(NotFoundError):
    """Order line item not found in storage."""

    def __init__(self, item_id: int):
        super().__init__("OrderItem", item_id)


class StockNotFoundError(NotFoundError):
    """Stock row not found in storage."""

    def __init__(self, stock_id: int):
        super().__init__("Stock", stock_id)


# Validation Exceptions
class ValidationError(ChandleryError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class NegativeQuantityError(ValidationError):
    """Movement quantity below zero; the kind encodes direction, not the sign."""

    def __init__(self, quantity: Any):
        super().__init__(
            field="quantity",
            message="Movement quantity must not be negative",
            value=quantity,
        )


class CurrencyMismatchError(ValidationError):
    """Line item currency differs from its order's currency."""

    def __init__(self, order_currency: str, item_currency: str):
        super().__init__(
            field="currency",
            message=(
                f"Line item currency '{item_currency}' does not match "
                f"order currency '{order_currency}'"
            ),
            value=item_currency,
        )
        self.details.update(
            {
                "order_currency": order_currency,
                "item_currency": item_currency,
            }
        )


class OrderLockedError(ValidationError):
    """Line items of a terminal order cannot change."""

    def __init__(self, order_id: int, status: str):
        super().__init__(
            field="order_id",
            message=f"Order {order_id} is {status}; its line items are locked",
            value=order_id,
        )
        self.details.update({"order_id": order_id, "status": status})


class DuplicateStockError(ValidationError):
    """A stock row already exists for the catalog item."""

    def __init__(self, supply_item_id: int, existing_id: int):
        super().__init__(
            field="supply_item_id",
            message=f"Stock already exists for supply item {supply_item_id}",
            value=supply_item_id,
        )
        self.details.update({"existing_id": existing_id})


# Workflow Exceptions
class InvalidStateTransitionError(ChandleryError):
    """The order state machine rejected the requested status."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Invalid status transition: {current} -> {target}",
            code="INVALID_STATE_TRANSITION",
            details={"current": current, "target": target},
        )
        self.current = current
        self.target = target


# Storage Exceptions
class StorageFailure(ChandleryError):
    """Storage collaborator failed; the cause is chained."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Storage failure during {operation}: {error}",
            code="STORAGE_FAILURE",
            details={"operation": operation, "error": error},
        )


class ConcurrentModificationError(StorageFailure):
    """Optimistic version check failed; another writer got there first."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(
            operation=f"update {entity}",
            error=f"{entity} {entity_id} was modified concurrently",
        )
        self.code = "CONCURRENT_MODIFICATION"
        self.details.update({"entity": entity, "id": entity_id})
