import itertools

import pytest

from app.shared.lifecycle import (
    ORDER_STATUSES, ORDER_TRANSITIONS, RECEIPT_STATUSES, RECEIPT_TRANSITIONS,
    OrderStatus, ReceiptStatus, StatusRegistry, TransitionTable,
)

ORDER_EDGES = {
    ("pending", "deposit_50"),
    ("pending", "confirmed_cod"),
    ("pending", "refund"),
    ("pending", "cancelled"),
    ("deposit_50", "confirmed_50"),
    ("deposit_50", "refund"),
    ("confirmed_50", "delivering"),
    ("confirmed_50", "refund"),
    ("confirmed_cod", "delivering"),
    ("confirmed_cod", "refund"),
    ("delivering", "completed"),
}

RECEIPT_EDGES = {("working", "finish"), ("working", "cancel")}


def test_order_table_matches_every_pair():
    for current, target in itertools.product(ORDER_STATUSES.statuses, repeat=2):
        expected = (current, target) in ORDER_EDGES
        assert ORDER_TRANSITIONS.is_transition_allowed(current, target) is expected, (current, target)


def test_receipt_table_matches_every_pair():
    for current, target in itertools.product(RECEIPT_STATUSES.statuses, repeat=2):
        expected = (current, target) in RECEIPT_EDGES
        assert RECEIPT_TRANSITIONS.is_transition_allowed(current, target) is expected, (current, target)


@pytest.mark.parametrize("status", sorted(ORDER_STATUSES.statuses))
def test_self_transitions_are_rejected(status):
    assert not ORDER_TRANSITIONS.is_transition_allowed(status, status)


@pytest.mark.parametrize("current,target", [
    ("pending", "shipped"),
    ("shipped", "pending"),
    (None, "pending"),
    ("pending", None),
    ("", ""),
])
def test_unknown_values_are_disallowed(current, target):
    assert ORDER_TRANSITIONS.is_transition_allowed(current, target) is False


def test_terminal_states_have_no_successors():
    for status in (OrderStatus.COMPLETED, OrderStatus.REFUND, OrderStatus.CANCELLED):
        assert ORDER_TRANSITIONS.is_terminal(status)
        assert ORDER_TRANSITIONS.allowed_from(status) == frozenset()
    for status in (ReceiptStatus.FINISH, ReceiptStatus.CANCEL):
        assert RECEIPT_TRANSITIONS.is_terminal(status)
    assert not ORDER_TRANSITIONS.is_terminal(OrderStatus.PENDING)
    assert not ORDER_TRANSITIONS.is_terminal("unknown")


def test_allowed_from_pending():
    assert ORDER_TRANSITIONS.allowed_from("pending") == {"deposit_50", "confirmed_cod", "refund", "cancelled"}


def test_table_rejects_unknown_statuses():
    registry = StatusRegistry("demo", ["a", "b"], initial="a", editable=["a"], cannot_delete=[])
    with pytest.raises(ValueError):
        TransitionTable(registry, {"a": ["z"]})


def test_registry_predicates():
    assert ORDER_STATUSES.is_valid("pending")
    assert not ORDER_STATUSES.is_valid("PENDING")
    assert ORDER_STATUSES.is_editable("pending")
    assert not ORDER_STATUSES.is_editable("completed")
    assert ORDER_STATUSES.is_cannot_delete("delivering")
    assert not ORDER_STATUSES.is_cannot_delete("cancelled")
    assert ORDER_STATUSES.is_completion("completed")
    assert not RECEIPT_STATUSES.is_completion("finish")
    assert RECEIPT_STATUSES.is_cannot_delete("working")
    assert not RECEIPT_STATUSES.is_cannot_delete("cancel")


def test_registry_rejects_unknown_subsets():
    with pytest.raises(ValueError):
        StatusRegistry("demo", ["a"], initial="a", editable=["b"], cannot_delete=[])
