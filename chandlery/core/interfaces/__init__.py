"""Storage interfaces (ports) implemented by the infrastructure layer."""

from chandlery.core.interfaces.order_store import IOrderStore
from chandlery.core.interfaces.report_store import IReportStore
from chandlery.core.interfaces.stock_store import IStockStore

__all__ = [
    "IOrderStore",
    "IStockStore",
    "IReportStore",
]
