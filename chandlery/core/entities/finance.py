"""Profit and totals value objects."""

from decimal import Decimal

from pydantic import BaseModel, Field

from chandlery.core.entities.order import Order, OrderItem

ZERO = Decimal("0")


class ItemProfit(BaseModel):
    """Cost, revenue and profit of one line item."""

    total_cost: Decimal
    total_revenue: Decimal
    gross_profit: Decimal
    margin_percent: Decimal | None = None  # None when selling price is zero


class OrderTotals(BaseModel):
    """Totals across all line items of one order."""

    item_count: int = 0
    total_cost: Decimal = ZERO
    total_revenue: Decimal = ZERO
    gross_profit: Decimal = ZERO
    margin_percent: Decimal | None = None  # None when revenue is zero
    currency: str


class OrderWithItems(BaseModel):
    """An order, its line items and their totals."""

    order: Order
    items: list[OrderItem] = Field(default_factory=list)
    totals: OrderTotals


class ReportableOrder(BaseModel):
    """Input row for portfolio reporting: one order with its line items."""

    order_id: int
    order_number: str
    ship_name: str | None = None
    currency: str
    items: list[OrderItem] = Field(default_factory=list)


class CurrencyBreakdown(BaseModel):
    """Portfolio totals restricted to one currency."""

    currency: str
    order_count: int = 0
    total_revenue: Decimal = ZERO
    total_cost: Decimal = ZERO
    total_profit: Decimal = ZERO
    average_margin: Decimal | None = None


class ProfitSummary(BaseModel):
    """Dashboard profit summary over all non-cancelled orders."""

    total_orders: int = 0
    total_revenue: Decimal = ZERO
    total_cost: Decimal = ZERO
    total_profit: Decimal = ZERO
    average_margin: Decimal | None = None
    currency: str
    by_currency: list[CurrencyBreakdown] = Field(default_factory=list)

    @property
    def is_mixed_currency(self) -> bool:
        return len(self.by_currency) > 1


class OrderProfitInfo(BaseModel):
    """One row of the most-profitable-orders ranking."""

    order_id: int
    order_number: str
    ship_name: str
    total_revenue: Decimal
    total_cost: Decimal
    profit: Decimal
    margin_percent: Decimal | None = None
    currency: str
