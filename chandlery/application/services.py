"""
Wiring of use cases to storage.

The bootstrap code owns the connection pool; ``build_services`` hands it
to the SQLite stores and the stores to the use cases, reading settings
once at wiring time. Nothing here is a module-level singleton.
"""

from dataclasses import dataclass

from chandlery.application.use_cases import (
    AddOrderItemUseCase,
    ApplyStockMovementUseCase,
    ComputeOrderTotalsUseCase,
    CreateOrderUseCase,
    CreateStockUseCase,
    DeleteOrderItemUseCase,
    DeleteOrderUseCase,
    DeleteStockUseCase,
    GetOrderWithItemsUseCase,
    GetStockUseCase,
    ListMovementsUseCase,
    ListOrdersUseCase,
    ListStockUseCase,
    ProfitSummaryUseCase,
    ReplayStockQuantityUseCase,
    StockSummaryUseCase,
    TopProfitableOrdersUseCase,
    UpdateOrderDetailsUseCase,
    UpdateOrderItemUseCase,
    UpdateOrderStatusUseCase,
    UpdateStockSettingsUseCase,
)
from chandlery.config import Settings, get_settings
from chandlery.core.interfaces import IOrderStore, IReportStore, IStockStore


@dataclass
class Services:
    """Every use case, ready to call."""

    create_order: CreateOrderUseCase
    update_order_details: UpdateOrderDetailsUseCase
    update_order_status: UpdateOrderStatusUseCase
    delete_order: DeleteOrderUseCase
    get_order: GetOrderWithItemsUseCase
    list_orders: ListOrdersUseCase
    order_totals: ComputeOrderTotalsUseCase
    add_item: AddOrderItemUseCase
    update_item: UpdateOrderItemUseCase
    delete_item: DeleteOrderItemUseCase
    apply_movement: ApplyStockMovementUseCase
    create_stock: CreateStockUseCase
    update_stock_settings: UpdateStockSettingsUseCase
    delete_stock: DeleteStockUseCase
    get_stock: GetStockUseCase
    list_stock: ListStockUseCase
    list_movements: ListMovementsUseCase
    stock_summary: StockSummaryUseCase
    replay_stock: ReplayStockQuantityUseCase
    profit_summary: ProfitSummaryUseCase
    top_orders: TopProfitableOrdersUseCase


def build_services(
    order_store: IOrderStore,
    stock_store: IStockStore,
    report_store: IReportStore,
    settings: Settings | None = None,
) -> Services:
    """Construct all use cases over the given stores."""
    settings = settings or get_settings()
    retries = settings.orders.conflict_retries
    finance = settings.finance

    return Services(
        create_order=CreateOrderUseCase(order_store, settings.orders.number_prefix),
        update_order_details=UpdateOrderDetailsUseCase(order_store, retries),
        update_order_status=UpdateOrderStatusUseCase(order_store, retries),
        delete_order=DeleteOrderUseCase(order_store),
        get_order=GetOrderWithItemsUseCase(order_store),
        list_orders=ListOrdersUseCase(order_store),
        order_totals=ComputeOrderTotalsUseCase(order_store, finance.fallback_currency),
        add_item=AddOrderItemUseCase(order_store),
        update_item=UpdateOrderItemUseCase(order_store),
        delete_item=DeleteOrderItemUseCase(order_store),
        apply_movement=ApplyStockMovementUseCase(stock_store, retries),
        create_stock=CreateStockUseCase(stock_store),
        update_stock_settings=UpdateStockSettingsUseCase(stock_store, retries),
        delete_stock=DeleteStockUseCase(stock_store),
        get_stock=GetStockUseCase(stock_store),
        list_stock=ListStockUseCase(stock_store),
        list_movements=ListMovementsUseCase(stock_store),
        stock_summary=StockSummaryUseCase(stock_store),
        replay_stock=ReplayStockQuantityUseCase(stock_store),
        profit_summary=ProfitSummaryUseCase(report_store, finance.reporting_currency),
        top_orders=TopProfitableOrdersUseCase(
            report_store,
            default_limit=finance.top_orders_limit,
            unknown_ship_label=finance.unknown_ship_label,
        ),
    )


def build_sqlite_services(pool, settings: Settings | None = None) -> Services:
    """Wire the SQLite stores over an already constructed ConnectionPool."""
    # Lazy import keeps the application layer free of infrastructure at import time
    from chandlery.infrastructure.storage.sqlite import (
        SQLiteOrderStore,
        SQLiteReportStore,
        SQLiteStockStore,
    )

    return build_services(
        SQLiteOrderStore(pool),
        SQLiteStockStore(pool),
        SQLiteReportStore(pool),
        settings,
    )
