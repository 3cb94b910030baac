"""Tests for stock read use cases."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from chandlery.application.use_cases.inspect_stock import (
    GetStockUseCase,
    ListMovementsUseCase,
    ListStockUseCase,
    ReplayStockQuantityUseCase,
    StockSummaryUseCase,
)
from chandlery.core.entities.stock import MovementKind, Stock, StockMovement
from chandlery.core.exceptions import StockNotFoundError


def stock(stock_id: int, quantity: str, minimum: str) -> Stock:
    return Stock(
        id=stock_id,
        supply_item_id=stock_id,
        quantity=Decimal(quantity),
        minimum_quantity=Decimal(minimum),
        unit="PCS",
    )


def movement(kind: MovementKind, quantity: str) -> StockMovement:
    return StockMovement(stock_id=1, kind=kind, quantity=Decimal(quantity), unit="PCS")


@pytest.fixture
def mock_stock_store():
    store = AsyncMock()
    store.list_stock.return_value = [
        stock(1, "100", "20"),
        stock(2, "10", "20"),
        stock(3, "0", "5"),
        stock(4, "20", "20"),
        stock(5, "0", "0"),
    ]
    return store


class TestStockSummaryUseCase:
    async def test_counts(self, mock_stock_store):
        summary = await StockSummaryUseCase(mock_stock_store).execute()

        assert summary.total_items == 5
        assert summary.low_stock_count == 2
        assert summary.out_of_stock_count == 2


class TestListStockUseCase:
    async def test_low_stock_ordered_by_shortfall(self, mock_stock_store):
        low = await ListStockUseCase(mock_stock_store).low_stock()

        assert [s.id for s in low] == [2, 3, 4, 5]

    async def test_list_passes_paging(self, mock_stock_store):
        await ListStockUseCase(mock_stock_store).execute(limit=10, offset=20)

        mock_stock_store.list_stock.assert_awaited_once_with(limit=10, offset=20)


class TestGetStockUseCase:
    async def test_not_found(self, mock_stock_store):
        mock_stock_store.get_stock.return_value = None

        with pytest.raises(StockNotFoundError):
            await GetStockUseCase(mock_stock_store).execute(9)

    async def test_with_movements(self, mock_stock_store, sample_stock):
        mock_stock_store.get_stock.return_value = sample_stock
        mock_stock_store.list_movements.return_value = [movement(MovementKind.IN, "100")]

        result = await GetStockUseCase(mock_stock_store).with_movements(1)

        assert result.stock is sample_stock
        assert len(result.movements) == 1


class TestListMovementsUseCase:
    async def test_missing_stock(self, mock_stock_store):
        mock_stock_store.get_stock.return_value = None

        with pytest.raises(StockNotFoundError):
            await ListMovementsUseCase(mock_stock_store).execute(9)

    async def test_recent(self, mock_stock_store):
        mock_stock_store.list_recent_movements.return_value = []

        assert await ListMovementsUseCase(mock_stock_store).recent(5) == []
        mock_stock_store.list_recent_movements.assert_awaited_once_with(limit=5)


class TestReplayStockQuantityUseCase:
    async def test_fold_oldest_first(self, mock_stock_store):
        mock_stock_store.get_stock.return_value = stock(1, "15", "0")
        # Newest first, as the store returns them
        mock_stock_store.list_movements.return_value = [
            movement(MovementKind.IN, "3"),
            movement(MovementKind.ADJUSTMENT, "12"),
            movement(MovementKind.OUT, "30"),
            movement(MovementKind.IN, "100"),
        ]

        assert await ReplayStockQuantityUseCase(mock_stock_store).execute(1) == Decimal("15")

    async def test_drift_still_returns_fold(self, mock_stock_store):
        mock_stock_store.get_stock.return_value = stock(1, "99", "0")
        mock_stock_store.list_movements.return_value = [movement(MovementKind.IN, "10")]

        assert await ReplayStockQuantityUseCase(mock_stock_store).execute(1) == Decimal("10")
