"""Tests for ApplyStockMovementUseCase."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from chandlery.application.dto.requests import StockMovementRequest
from chandlery.application.use_cases.apply_stock_movement import ApplyStockMovementUseCase
from chandlery.core.entities.stock import MovementKind
from chandlery.core.exceptions import (
    ConcurrentModificationError,
    NegativeQuantityError,
    StockNotFoundError,
)


@pytest.fixture
def mock_stock_store():
    store = AsyncMock()
    store.record_movement.side_effect = (
        lambda movement, new_quantity, expected_version: movement.model_copy(update={"id": 1})
    )
    return store


@pytest.fixture
def use_case(mock_stock_store):
    return ApplyStockMovementUseCase(stock_store=mock_stock_store, conflict_retries=1)


def request(kind: MovementKind, quantity: str, **kwargs) -> StockMovementRequest:
    return StockMovementRequest(stock_id=1, kind=kind, quantity=Decimal(quantity), **kwargs)


class TestApplyStockMovementUseCase:
    async def test_out_reduces_quantity(self, use_case, mock_stock_store, sample_stock):
        mock_stock_store.get_stock.return_value = sample_stock

        movement = await use_case.execute(
            request(MovementKind.OUT, "90", reference_type="order", reference_id=7)
        )

        assert movement.id == 1
        assert movement.kind is MovementKind.OUT
        assert movement.quantity == Decimal("90")
        assert movement.unit == "MTR"
        assert movement.reference_id == 7
        args = mock_stock_store.record_movement.await_args
        assert args.args[1] == Decimal("10")
        assert args.kwargs["expected_version"] == 1

    async def test_out_clamped_at_zero(self, use_case, mock_stock_store, sample_stock):
        mock_stock_store.get_stock.return_value = sample_stock

        await use_case.execute(request(MovementKind.OUT, "150"))

        assert mock_stock_store.record_movement.await_args.args[1] == Decimal("0")

    async def test_adjustment_is_absolute(self, use_case, mock_stock_store, sample_stock):
        mock_stock_store.get_stock.return_value = sample_stock

        await use_case.execute(request(MovementKind.ADJUSTMENT, "42"))

        assert mock_stock_store.record_movement.await_args.args[1] == Decimal("42")

    async def test_return_adds(self, use_case, mock_stock_store, sample_stock):
        mock_stock_store.get_stock.return_value = sample_stock

        await use_case.execute(request(MovementKind.RETURN, "5"))

        assert mock_stock_store.record_movement.await_args.args[1] == Decimal("105")

    async def test_negative_quantity_rejected_before_read(self, use_case, mock_stock_store):
        with pytest.raises(NegativeQuantityError):
            await use_case.execute(request(MovementKind.IN, "-1"))

        mock_stock_store.get_stock.assert_not_called()
        mock_stock_store.record_movement.assert_not_called()

    async def test_stock_not_found(self, use_case, mock_stock_store):
        mock_stock_store.get_stock.return_value = None

        with pytest.raises(StockNotFoundError):
            await use_case.execute(request(MovementKind.IN, "1"))

    async def test_conflict_recomputes_from_fresh_row(self, use_case, mock_stock_store, sample_stock):
        """A concurrent movement landed first; the retry builds on its result."""
        fresh = sample_stock.model_copy(update={"quantity": Decimal("60"), "version": 2})
        mock_stock_store.get_stock.side_effect = [sample_stock, fresh]
        calls = []

        async def record(movement, new_quantity, expected_version):
            calls.append((new_quantity, expected_version))
            if len(calls) == 1:
                raise ConcurrentModificationError("Stock", 1)
            return movement

        mock_stock_store.record_movement.side_effect = record

        await use_case.execute(request(MovementKind.OUT, "10"))

        assert calls == [(Decimal("90"), 1), (Decimal("50"), 2)]

    async def test_conflict_surfaces_after_retries(self, use_case, mock_stock_store, sample_stock):
        mock_stock_store.get_stock.return_value = sample_stock
        mock_stock_store.record_movement.side_effect = ConcurrentModificationError("Stock", 1)

        with pytest.raises(ConcurrentModificationError):
            await use_case.execute(request(MovementKind.IN, "1"))

        assert mock_stock_store.record_movement.await_count == 2
