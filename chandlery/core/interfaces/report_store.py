"""Abstract interface for reporting reads."""

from abc import ABC, abstractmethod

from chandlery.core.entities.finance import ReportableOrder


class IReportStore(ABC):
    """Read-only access to the data behind profit reports."""

    @abstractmethod
    async def list_reportable_orders(self) -> list[ReportableOrder]:
        """Non-cancelled orders that have at least one line item, with items."""
        pass
