"""Application use cases."""

from chandlery.application.use_cases.apply_stock_movement import ApplyStockMovementUseCase
from chandlery.application.use_cases.compute_order_totals import (
    ComputeOrderTotalsUseCase,
    compute_item_profit,
)
from chandlery.application.use_cases.create_order import (
    CreateOrderUseCase,
    generate_order_number,
)
from chandlery.application.use_cases.delete_order import DeleteOrderUseCase
from chandlery.application.use_cases.get_orders import (
    GetOrderWithItemsUseCase,
    ListOrdersUseCase,
)
from chandlery.application.use_cases.inspect_stock import (
    GetStockUseCase,
    ListMovementsUseCase,
    ListStockUseCase,
    ReplayStockQuantityUseCase,
    StockSummaryUseCase,
)
from chandlery.application.use_cases.manage_stock import (
    CreateStockUseCase,
    DeleteStockUseCase,
    UpdateStockSettingsUseCase,
)
from chandlery.application.use_cases.order_items import (
    AddOrderItemUseCase,
    DeleteOrderItemUseCase,
    UpdateOrderItemUseCase,
)
from chandlery.application.use_cases.profit_report import (
    ProfitSummaryUseCase,
    TopProfitableOrdersUseCase,
)
from chandlery.application.use_cases.update_order_details import UpdateOrderDetailsUseCase
from chandlery.application.use_cases.update_order_status import UpdateOrderStatusUseCase

__all__ = [
    # Orders
    "CreateOrderUseCase",
    "generate_order_number",
    "UpdateOrderDetailsUseCase",
    "UpdateOrderStatusUseCase",
    "DeleteOrderUseCase",
    "GetOrderWithItemsUseCase",
    "ListOrdersUseCase",
    "ComputeOrderTotalsUseCase",
    "compute_item_profit",
    # Line items
    "AddOrderItemUseCase",
    "UpdateOrderItemUseCase",
    "DeleteOrderItemUseCase",
    # Stock
    "ApplyStockMovementUseCase",
    "CreateStockUseCase",
    "UpdateStockSettingsUseCase",
    "DeleteStockUseCase",
    "GetStockUseCase",
    "ListStockUseCase",
    "ListMovementsUseCase",
    "StockSummaryUseCase",
    "ReplayStockQuantityUseCase",
    # Reporting
    "ProfitSummaryUseCase",
    "TopProfitableOrdersUseCase",
]
