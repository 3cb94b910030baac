"""Request DTOs for the use cases.

Pydantic v2 models describing caller input. Business rules (positive
quantities, currency consistency, terminal-order locks) are enforced by
the use cases, so the models only carry shape and types.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from chandlery.core.entities.order import DeliveryType, OrderStatus
from chandlery.core.entities.stock import MovementKind


class CreateOrderRequest(BaseModel):
    """Request to open a new order for a ship."""

    ship_id: int = Field(..., description="Ship the order is for")
    currency: str = Field(
        ...,
        description="Three-letter currency code, fixed for the order's lifetime",
        examples=["USD", "EUR", "TRY"],
    )
    delivery_port: str | None = Field(default=None, description="Free-text delivery port")
    ship_visit_id: int | None = Field(default=None, description="Optional port-call link")
    notes: str | None = None


class UpdateOrderDetailsRequest(BaseModel):
    """Direct field edits. Status and currency are not editable here."""

    order_id: int
    delivery_port: str | None = None
    notes: str | None = None
    ship_visit_id: int | None = None


class UpdateOrderStatusRequest(BaseModel):
    """Request to move an order through its workflow."""

    order_id: int
    status: OrderStatus = Field(..., description="Requested target status")


class AddOrderItemRequest(BaseModel):
    """Request to add a priced line item to an order."""

    order_id: int
    product_name: str
    impa_code: str | None = Field(default=None, description="Catalog code")
    description: str | None = None
    quantity: Decimal = Field(..., description="Positive quantity")
    unit: str = Field(..., examples=["PCS", "KG", "LTR"])
    buying_price: Decimal = Field(..., description="Cost per unit")
    selling_price: Decimal = Field(..., description="Revenue per unit")
    currency: str | None = Field(
        default=None,
        description="Defaults to the order currency; any other value is rejected",
    )
    delivery_type: DeliveryType = DeliveryType.VIA_WAREHOUSE
    warehouse_delivery_date: date | None = None
    ship_delivery_date: date | None = None
    notes: str | None = None


class UpdateOrderItemRequest(BaseModel):
    """Partial edit of a line item; ``None`` leaves a field unchanged."""

    item_id: int
    product_name: str | None = None
    impa_code: str | None = None
    description: str | None = None
    quantity: Decimal | None = None
    unit: str | None = None
    buying_price: Decimal | None = None
    selling_price: Decimal | None = None
    currency: str | None = None
    delivery_type: DeliveryType | None = None
    warehouse_delivery_date: date | None = None
    ship_delivery_date: date | None = None
    notes: str | None = None


class CreateStockRequest(BaseModel):
    """Request to start tracking a catalog item in the warehouse."""

    supply_item_id: int
    unit: str
    quantity: Decimal = Field(
        default=Decimal("0"),
        description="Opening on-hand quantity, recorded as an IN movement",
    )
    warehouse_location: str | None = None
    minimum_quantity: Decimal = Field(
        default=Decimal("0"),
        description="Low-stock threshold",
    )


class UpdateStockSettingsRequest(BaseModel):
    """Location and threshold edits. Quantity only changes via movements."""

    stock_id: int
    warehouse_location: str | None = None
    minimum_quantity: Decimal | None = None


class StockMovementRequest(BaseModel):
    """Request to apply one inventory event to a stock row."""

    stock_id: int
    kind: MovementKind
    quantity: Decimal = Field(
        ...,
        description=(
            "Non-negative amount. For ADJUSTMENT this is the new absolute "
            "on-hand level, not a delta"
        ),
    )
    reference_type: str | None = Field(
        default=None,
        description="Kind of causing entity",
        examples=["order", "supplier"],
    )
    reference_id: int | None = None
    reference_info: str | None = Field(default=None, description="Free-text context")
    notes: str | None = None
