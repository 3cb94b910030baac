"""Data transfer objects for the application layer."""

from chandlery.application.dto.requests import (
    AddOrderItemRequest,
    CreateOrderRequest,
    CreateStockRequest,
    StockMovementRequest,
    UpdateOrderDetailsRequest,
    UpdateOrderItemRequest,
    UpdateOrderStatusRequest,
    UpdateStockSettingsRequest,
)

__all__ = [
    "CreateOrderRequest",
    "UpdateOrderDetailsRequest",
    "UpdateOrderStatusRequest",
    "AddOrderItemRequest",
    "UpdateOrderItemRequest",
    "CreateStockRequest",
    "UpdateStockSettingsRequest",
    "StockMovementRequest",
]
