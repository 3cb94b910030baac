"""Warehouse stock and movement ledger entities."""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class MovementKind(str, Enum):
    """
    Kinds of stock movement. Values are the persisted tokens.

    ADJUSTMENT is the odd one out: its quantity is the new absolute
    on-hand level, not a delta.
    """

    IN = "IN"
    OUT = "OUT"
    ADJUSTMENT = "ADJUSTMENT"
    RETURN = "RETURN"

    @classmethod
    def from_token(cls, token: str) -> "MovementKind":
        try:
            return cls(token)
        except ValueError:
            raise ValueError(f"Unknown movement kind token: {token!r}") from None


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Stock(BaseModel):
    """Current on-hand quantity for one catalog item."""

    id: int | None = None
    supply_item_id: int  # FK -> supply_items.id, unique
    supply_item_name: str | None = None  # joined, read-only
    quantity: Decimal = Decimal("0")
    unit: str
    warehouse_location: str | None = None
    minimum_quantity: Decimal = Decimal("0")
    version: int = 1
    last_updated: datetime = Field(default_factory=_utcnow)


class StockMovement(BaseModel):
    """Immutable ledger entry for one quantity-affecting event."""

    id: int | None = None
    stock_id: int
    supply_item_name: str | None = None  # joined, read-only
    kind: MovementKind
    quantity: Decimal  # never negative; the kind encodes direction
    unit: str
    reference_type: str | None = None  # e.g. "order", "supplier"
    reference_id: int | None = None
    reference_info: str | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)


class StockWithMovements(BaseModel):
    """A stock row together with its movement history, newest first."""

    stock: Stock
    movements: list[StockMovement] = Field(default_factory=list)


class StockSummary(BaseModel):
    """Warehouse dashboard counters."""

    total_items: int = 0
    low_stock_count: int = 0
    out_of_stock_count: int = 0
