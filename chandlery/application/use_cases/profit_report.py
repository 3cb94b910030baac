"""Dashboard profit reporting use cases."""

from chandlery.config import get_logger
from chandlery.core.entities.finance import OrderProfitInfo, ProfitSummary
from chandlery.core.interfaces.report_store import IReportStore
from chandlery.core.services.order_aggregation import profit_summary, rank_by_profit

logger = get_logger(__name__)


class ProfitSummaryUseCase:
    """Revenue, cost and margin over every non-cancelled order with items."""

    def __init__(self, report_store: IReportStore, reporting_currency: str = "TRY"):
        self._report_store = report_store
        self._reporting_currency = reporting_currency

    async def execute(self) -> ProfitSummary:
        orders = await self._report_store.list_reportable_orders()
        summary = profit_summary(orders, self._reporting_currency)

        if summary.is_mixed_currency:
            logger.warning(
                "profit_summary_mixed_currency",
                currencies=[b.currency for b in summary.by_currency],
                headline_currency=summary.currency,
            )
        return summary


class TopProfitableOrdersUseCase:
    """Most profitable non-cancelled orders, highest profit first."""

    def __init__(
        self,
        report_store: IReportStore,
        default_limit: int = 10,
        unknown_ship_label: str = "Unknown ship",
    ):
        self._report_store = report_store
        self._default_limit = default_limit
        self._unknown_ship_label = unknown_ship_label

    async def execute(self, limit: int | None = None) -> list[OrderProfitInfo]:
        limit = self._default_limit if limit is None else limit
        orders = await self._report_store.list_reportable_orders()
        return rank_by_profit(orders, limit, self._unknown_ship_label)
