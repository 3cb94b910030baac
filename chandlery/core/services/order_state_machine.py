"""
Order status state machine.

Forward flow::

    NEW -> QUOTED -> AGREED -> WAITING_GOODS -> PREPARED
        -> ON_WAY -> DELIVERED -> INVOICED

CANCELLED is a side exit reachable from every state except CANCELLED and
INVOICED. No stage may be skipped and no status moves backward.
"""

from chandlery.core.entities.order import OrderStatus
from chandlery.core.exceptions import InvalidStateTransitionError

_FORWARD: dict[OrderStatus, OrderStatus | None] = {
    OrderStatus.NEW: OrderStatus.QUOTED,
    OrderStatus.QUOTED: OrderStatus.AGREED,
    OrderStatus.AGREED: OrderStatus.WAITING_GOODS,
    OrderStatus.WAITING_GOODS: OrderStatus.PREPARED,
    OrderStatus.PREPARED: OrderStatus.ON_WAY,
    OrderStatus.ON_WAY: OrderStatus.DELIVERED,
    OrderStatus.DELIVERED: OrderStatus.INVOICED,
    OrderStatus.INVOICED: None,
    OrderStatus.CANCELLED: None,
}

TERMINAL_STATUSES = frozenset({OrderStatus.INVOICED, OrderStatus.CANCELLED})


def next_status(current: OrderStatus) -> OrderStatus | None:
    """Return the single forward successor of ``current``, if any."""
    return _FORWARD[current]


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """Decide whether ``current -> target`` is a legal move."""
    if target is OrderStatus.CANCELLED:
        return current not in TERMINAL_STATUSES
    return _FORWARD[current] is target


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATUSES


def ensure_transition(current: OrderStatus, target: OrderStatus) -> None:
    """Raise InvalidStateTransitionError unless ``current -> target`` is legal."""
    if not can_transition(current, target):
        raise InvalidStateTransitionError(current.token, target.token)


def allowed_targets(current: OrderStatus) -> list[OrderStatus]:
    """All statuses reachable in one step from ``current``."""
    return [s for s in OrderStatus if can_transition(current, s)]
