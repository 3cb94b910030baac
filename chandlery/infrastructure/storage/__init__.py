"""Storage infrastructure implementations."""

from chandlery.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteOrderStore,
    SQLiteReportStore,
    SQLiteStockStore,
)

__all__ = [
    "ConnectionPool",
    "SQLiteOrderStore",
    "SQLiteReportStore",
    "SQLiteStockStore",
]
