"""
Inventory ledger rules.

Stock on hand is the fold of its movement log:

    IN, RETURN   quantity + movement
    OUT          quantity - movement
    ADJUSTMENT   movement            (absolute level, NOT a delta)

and is clamped at zero. Movement quantities are never negative; a
negative input is rejected before the rule runs.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from chandlery.core.entities.stock import MovementKind
from chandlery.core.exceptions import NegativeQuantityError
from chandlery.core.services.money import ZERO, to_decimal


def validate_movement_quantity(quantity: Any) -> Decimal:
    """Return the quantity as Decimal, or raise NegativeQuantityError."""
    value = to_decimal(quantity)
    if value < ZERO:
        raise NegativeQuantityError(quantity)
    return value


def apply_movement(
    current_quantity: Any,
    kind: MovementKind,
    movement_quantity: Any,
) -> Decimal:
    """Compute the on-hand quantity after one movement."""
    amount = validate_movement_quantity(movement_quantity)
    current = to_decimal(current_quantity)

    if kind is MovementKind.IN or kind is MovementKind.RETURN:
        new_quantity = current + amount
    elif kind is MovementKind.OUT:
        new_quantity = current - amount
    elif kind is MovementKind.ADJUSTMENT:
        new_quantity = amount
    else:
        raise ValueError(f"Unhandled movement kind: {kind!r}")

    return max(ZERO, new_quantity)


def fold_movements(
    movements: Iterable[tuple[MovementKind, Any]],
    initial: Any = ZERO,
) -> Decimal:
    """Fold (kind, quantity) pairs, oldest first, starting from ``initial``."""
    quantity = to_decimal(initial)
    for kind, amount in movements:
        quantity = apply_movement(quantity, kind, amount)
    return quantity


def is_out_of_stock(quantity: Any) -> bool:
    return to_decimal(quantity) <= ZERO


def is_low_stock(quantity: Any, minimum_quantity: Any) -> bool:
    """Low means some stock left, but no more than the minimum."""
    value = to_decimal(quantity)
    return ZERO < value <= to_decimal(minimum_quantity)
