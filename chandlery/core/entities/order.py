"""Order and line item domain entities."""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class OrderStatus(str, Enum):
    """
    Order workflow status.

    Values are the persisted tokens. Renaming one breaks stored history,
    so the mapping is spelled out instead of derived from member names.
    """

    NEW = "NEW"
    QUOTED = "QUOTED"
    AGREED = "AGREED"
    WAITING_GOODS = "WAITING_GOODS"
    PREPARED = "PREPARED"
    ON_WAY = "ON_WAY"
    DELIVERED = "DELIVERED"
    INVOICED = "INVOICED"
    CANCELLED = "CANCELLED"

    @property
    def token(self) -> str:
        return self.value

    @classmethod
    def from_token(cls, token: str) -> "OrderStatus":
        """Parse a stored token; unknown tokens are an error, never a default."""
        try:
            return cls(token)
        except ValueError:
            raise ValueError(f"Unknown order status token: {token!r}") from None


class DeliveryType(str, Enum):
    """How a line item reaches the ship."""

    VIA_WAREHOUSE = "VIA_WAREHOUSE"  # supplier -> warehouse -> ship
    DIRECT_TO_SHIP = "DIRECT_TO_SHIP"  # supplier -> ship

    @classmethod
    def from_token(cls, token: str) -> "DeliveryType":
        try:
            return cls(token)
        except ValueError:
            raise ValueError(f"Unknown delivery type token: {token!r}") from None


def _utcnow() -> datetime:
    return datetime.now(UTC)


def normalize_currency(value: str) -> str:
    """Upper-case a three-letter currency code, rejecting anything else."""
    code = (value or "").strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValueError(f"Invalid currency code: {value!r}")
    return code


class Order(BaseModel):
    """A commercial request for supplies tied to one ship."""

    id: int | None = None
    order_number: str
    ship_id: int
    ship_name: str | None = None  # joined from ships, read-only
    ship_visit_id: int | None = None
    ship_visit_info: str | None = None  # joined from ship_visits, read-only
    status: OrderStatus = OrderStatus.NEW
    currency: str
    delivery_port: str | None = None
    notes: str | None = None
    version: int = 1  # optimistic concurrency guard
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("currency")
    @classmethod
    def check_currency(cls, v: str) -> str:
        return normalize_currency(v)

    @property
    def is_terminal(self) -> bool:
        return self.status in (OrderStatus.INVOICED, OrderStatus.CANCELLED)


class OrderItem(BaseModel):
    """
    One priced product within an order.

    Buying and selling prices are independent inputs; neither is ever
    derived from the other.
    """

    id: int | None = None
    order_id: int
    product_name: str
    impa_code: str | None = None  # catalog code
    description: str | None = None
    quantity: Decimal
    unit: str
    buying_price: Decimal  # cost per unit
    selling_price: Decimal  # revenue per unit
    currency: str
    delivery_type: DeliveryType = DeliveryType.VIA_WAREHOUSE
    warehouse_delivery_date: date | None = None
    ship_delivery_date: date | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("currency")
    @classmethod
    def check_currency(cls, v: str) -> str:
        return normalize_currency(v)
