"""SQLite storage implementations."""

from chandlery.infrastructure.storage.sqlite.connection import ConnectionPool
from chandlery.infrastructure.storage.sqlite.order_store import SQLiteOrderStore
from chandlery.infrastructure.storage.sqlite.report_store import SQLiteReportStore
from chandlery.infrastructure.storage.sqlite.stock_store import SQLiteStockStore

# Type aliases for convenience
OrderStore = SQLiteOrderStore
StockStore = SQLiteStockStore
ReportStore = SQLiteReportStore

__all__ = [
    # Connection
    "ConnectionPool",
    # Store classes
    "SQLiteOrderStore",
    "SQLiteStockStore",
    "SQLiteReportStore",
    # Type aliases
    "OrderStore",
    "StockStore",
    "ReportStore",
]
