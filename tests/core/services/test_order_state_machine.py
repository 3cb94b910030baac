"""Tests for the order status state machine."""

import pytest

from chandlery.core.entities.order import OrderStatus
from chandlery.core.exceptions import InvalidStateTransitionError
from chandlery.core.services.order_state_machine import (
    TERMINAL_STATUSES,
    allowed_targets,
    can_transition,
    ensure_transition,
    is_terminal,
    next_status,
)

FORWARD = [
    OrderStatus.NEW,
    OrderStatus.QUOTED,
    OrderStatus.AGREED,
    OrderStatus.WAITING_GOODS,
    OrderStatus.PREPARED,
    OrderStatus.ON_WAY,
    OrderStatus.DELIVERED,
    OrderStatus.INVOICED,
]


def expected(current: OrderStatus, target: OrderStatus) -> bool:
    """Reference table: one step forward, or cancel from a live state."""
    if target is OrderStatus.CANCELLED:
        return current not in (OrderStatus.CANCELLED, OrderStatus.INVOICED)
    if current is OrderStatus.CANCELLED:
        return False
    idx = FORWARD.index(current)
    return idx + 1 < len(FORWARD) and FORWARD[idx + 1] is target


class TestNextStatus:
    """Tests for next_status()."""

    @pytest.mark.parametrize("idx", range(len(FORWARD) - 1))
    def test_forward_successor(self, idx):
        assert next_status(FORWARD[idx]) is FORWARD[idx + 1]

    def test_invoiced_has_no_successor(self):
        assert next_status(OrderStatus.INVOICED) is None

    def test_cancelled_has_no_successor(self):
        assert next_status(OrderStatus.CANCELLED) is None


class TestCanTransition:
    """Tests for can_transition()."""

    @pytest.mark.parametrize("current", list(OrderStatus))
    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_matches_table(self, current, target):
        assert can_transition(current, target) is expected(current, target)

    @pytest.mark.parametrize("status", list(OrderStatus))
    def test_self_transition_never_allowed(self, status):
        assert can_transition(status, status) is False

    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_invoiced_is_final(self, target):
        assert can_transition(OrderStatus.INVOICED, target) is False

    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_cancelled_is_final(self, target):
        assert can_transition(OrderStatus.CANCELLED, target) is False

    @pytest.mark.parametrize("current", FORWARD[:-1])
    def test_cancel_from_live_state(self, current):
        assert can_transition(current, OrderStatus.CANCELLED) is True

    def test_skipping_a_stage_rejected(self):
        assert can_transition(OrderStatus.QUOTED, OrderStatus.WAITING_GOODS) is False

    def test_moving_backward_rejected(self):
        assert can_transition(OrderStatus.AGREED, OrderStatus.QUOTED) is False


class TestEnsureTransition:
    """Tests for ensure_transition()."""

    def test_valid_transition_passes(self):
        ensure_transition(OrderStatus.NEW, OrderStatus.QUOTED)

    def test_rejection_carries_pair(self):
        with pytest.raises(InvalidStateTransitionError) as exc_info:
            ensure_transition(OrderStatus.NEW, OrderStatus.AGREED)

        assert exc_info.value.current == "NEW"
        assert exc_info.value.target == "AGREED"
        assert exc_info.value.details == {"current": "NEW", "target": "AGREED"}
        assert "NEW -> AGREED" in str(exc_info.value)


class TestTerminal:
    """Tests for terminal status helpers."""

    def test_terminal_statuses(self):
        assert TERMINAL_STATUSES == {OrderStatus.INVOICED, OrderStatus.CANCELLED}

    def test_is_terminal(self):
        assert is_terminal(OrderStatus.INVOICED)
        assert is_terminal(OrderStatus.CANCELLED)
        assert not is_terminal(OrderStatus.DELIVERED)

    def test_allowed_targets_from_new(self):
        assert allowed_targets(OrderStatus.NEW) == [
            OrderStatus.QUOTED,
            OrderStatus.CANCELLED,
        ]

    def test_allowed_targets_from_terminal(self):
        assert allowed_targets(OrderStatus.INVOICED) == []
        assert allowed_targets(OrderStatus.CANCELLED) == []
