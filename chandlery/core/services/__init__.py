"""
Core business logic.

Pure functions over entities; no storage, no I/O. The application layer
feeds them data read through the storage interfaces.
"""

from chandlery.core.services import (
    inventory_ledger,
    money,
    order_aggregation,
    order_state_machine,
)
from chandlery.core.services.inventory_ledger import (
    apply_movement,
    fold_movements,
    is_low_stock,
    is_out_of_stock,
    validate_movement_quantity,
)
from chandlery.core.services.money import (
    item_cost,
    item_gross_profit,
    item_profit,
    item_revenue,
    margin_percent,
)
from chandlery.core.services.order_aggregation import (
    order_totals,
    profit_summary,
    rank_by_profit,
)
from chandlery.core.services.order_state_machine import (
    TERMINAL_STATUSES,
    can_transition,
    ensure_transition,
    is_terminal,
    next_status,
)

__all__ = [
    "inventory_ledger",
    "money",
    "order_aggregation",
    "order_state_machine",
    # State machine
    "can_transition",
    "next_status",
    "ensure_transition",
    "is_terminal",
    "TERMINAL_STATUSES",
    # Ledger
    "apply_movement",
    "fold_movements",
    "validate_movement_quantity",
    "is_low_stock",
    "is_out_of_stock",
    # Money
    "item_cost",
    "item_revenue",
    "item_gross_profit",
    "margin_percent",
    "item_profit",
    # Aggregation
    "order_totals",
    "profit_summary",
    "rank_by_profit",
]
