"""Domain entities."""

from chandlery.core.entities.finance import (
    CurrencyBreakdown,
    ItemProfit,
    OrderProfitInfo,
    OrderTotals,
    OrderWithItems,
    ProfitSummary,
    ReportableOrder,
)
from chandlery.core.entities.order import (
    DeliveryType,
    Order,
    OrderItem,
    OrderStatus,
    normalize_currency,
)
from chandlery.core.entities.stock import (
    MovementKind,
    Stock,
    StockMovement,
    StockSummary,
    StockWithMovements,
)

__all__ = [
    # Orders
    "Order",
    "OrderItem",
    "OrderStatus",
    "DeliveryType",
    "normalize_currency",
    # Stock
    "Stock",
    "StockMovement",
    "MovementKind",
    "StockSummary",
    "StockWithMovements",
    # Finance
    "ItemProfit",
    "OrderTotals",
    "OrderWithItems",
    "ReportableOrder",
    "CurrencyBreakdown",
    "ProfitSummary",
    "OrderProfitInfo",
]
