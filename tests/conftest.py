"""Pytest configuration and fixtures."""

from collections.abc import Generator
from decimal import Decimal

import pytest

from chandlery.config import reset_settings
from chandlery.core.entities import Order, OrderItem, OrderStatus, Stock


@pytest.fixture(autouse=True)
def fresh_settings(tmp_path, monkeypatch) -> Generator[None, None, None]:
    """Isolate settings from the developer's environment and data dir."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def sample_order() -> Order:
    """A persisted-looking order in status NEW."""
    return Order(
        id=1,
        order_number="ORD-20240315143000-ABC123",
        ship_id=1,
        ship_name="MV Aurora",
        status=OrderStatus.NEW,
        currency="USD",
        delivery_port="Mersin",
    )


def make_item(
    buying: str = "100",
    selling: str = "150",
    quantity: str = "3",
    currency: str = "USD",
    order_id: int = 1,
    item_id: int | None = None,
) -> OrderItem:
    return OrderItem(
        id=item_id,
        order_id=order_id,
        product_name="Rope 24mm",
        quantity=Decimal(quantity),
        unit="MTR",
        buying_price=Decimal(buying),
        selling_price=Decimal(selling),
        currency=currency,
    )


@pytest.fixture
def item_factory():
    """Build line items from string amounts."""
    return make_item


@pytest.fixture
def sample_stock() -> Stock:
    """Stock of 100 with a low-stock threshold of 20."""
    return Stock(
        id=1,
        supply_item_id=1,
        supply_item_name="Rope 24mm",
        quantity=Decimal("100"),
        unit="MTR",
        minimum_quantity=Decimal("20"),
        version=1,
    )
