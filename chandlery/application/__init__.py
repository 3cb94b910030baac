"""
Application layer - use cases, request DTOs and wiring.

Use cases coordinate the pure core services with the storage ports and
are the only entry point for callers.
"""

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
from chandlery.application.services import Services, build_services, build_sqlite_services

__all__ = [
    # Requests
    "CreateOrderRequest",
    "UpdateOrderDetailsRequest",
    "UpdateOrderStatusRequest",
    "AddOrderItemRequest",
    "UpdateOrderItemRequest",
    "CreateStockRequest",
    "UpdateStockSettingsRequest",
    "StockMovementRequest",
    # Wiring
    "Services",
    "build_services",
    "build_sqlite_services",
]
