"""Tests for CreateOrderUseCase."""

import re
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from chandlery.application.dto.requests import CreateOrderRequest
from chandlery.application.use_cases.create_order import (
    CreateOrderUseCase,
    generate_order_number,
)
from chandlery.core.entities.order import OrderStatus
from chandlery.core.exceptions import ValidationError


@pytest.fixture
def mock_order_store():
    store = AsyncMock()
    store.create_order.side_effect = lambda order: order.model_copy(update={"id": 1})
    return store


@pytest.fixture
def use_case(mock_order_store):
    return CreateOrderUseCase(order_store=mock_order_store, number_prefix="ORD")


class TestGenerateOrderNumber:
    def test_format(self):
        number = generate_order_number("ORD", datetime(2024, 3, 15, 14, 30, 0, tzinfo=UTC))
        assert re.fullmatch(r"ORD-20240315143000-[0-9A-F]{6}", number)

    def test_unique_within_same_second(self):
        now = datetime(2024, 3, 15, 14, 30, 0, tzinfo=UTC)
        numbers = {generate_order_number("ORD", now) for _ in range(50)}
        assert len(numbers) == 50


class TestCreateOrderUseCase:
    async def test_creates_new_order(self, use_case, mock_order_store):
        request = CreateOrderRequest(ship_id=4, currency="eur", delivery_port="Mersin")

        order = await use_case.execute(request)

        assert order.id == 1
        assert order.status is OrderStatus.NEW
        assert order.currency == "EUR"
        assert order.version == 1
        assert order.order_number.startswith("ORD-")
        mock_order_store.create_order.assert_awaited_once()

    async def test_invalid_currency(self, use_case, mock_order_store):
        with pytest.raises(ValidationError):
            await use_case.execute(CreateOrderRequest(ship_id=4, currency="EURO"))

        mock_order_store.create_order.assert_not_called()
