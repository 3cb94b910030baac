"""Tests for profit reporting use cases."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from chandlery.application.use_cases.profit_report import (
    ProfitSummaryUseCase,
    TopProfitableOrdersUseCase,
)
from chandlery.core.entities.finance import ReportableOrder


@pytest.fixture
def mock_report_store(item_factory):
    store = AsyncMock()
    store.list_reportable_orders.return_value = [
        ReportableOrder(
            order_id=i,
            order_number=f"ORD-{i}",
            ship_name=None if i == 3 else "MV Aurora",
            currency="USD",
            items=[item_factory("10", str(10 + i * 5), "1")],
        )
        for i in range(1, 4)
    ]
    return store


class TestProfitSummaryUseCase:
    async def test_summary(self, mock_report_store):
        summary = await ProfitSummaryUseCase(mock_report_store, "TRY").execute()

        assert summary.total_orders == 3
        assert summary.total_cost == Decimal("30")
        assert summary.total_revenue == Decimal("60")
        assert summary.total_profit == Decimal("30")
        assert summary.average_margin == Decimal("50")
        assert summary.currency == "USD"


class TestTopProfitableOrdersUseCase:
    async def test_default_limit(self, mock_report_store):
        use_case = TopProfitableOrdersUseCase(
            mock_report_store, default_limit=2, unknown_ship_label="Unknown ship"
        )

        ranked = await use_case.execute()

        assert [r.order_id for r in ranked] == [3, 2]
        assert ranked[0].ship_name == "Unknown ship"

    async def test_explicit_limit(self, mock_report_store):
        use_case = TopProfitableOrdersUseCase(mock_report_store, default_limit=2)

        assert len(await use_case.execute(limit=10)) == 3
