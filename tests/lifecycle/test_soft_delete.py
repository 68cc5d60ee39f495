import pytest

from app.shared.lifecycle import ErrorCode, ORDER_STATUSES, RECEIPT_STATUSES, SoftDeleteCoordinator

from .fakes import FIXED_NOW, Subject, fixed_clock


def coordinator(registry=ORDER_STATUSES):
    return SoftDeleteCoordinator(registry, label="pedido", clock=fixed_clock)


def test_delete_then_restore_round_trip():
    order = Subject(id=1, status_id="cancelled")
    coord = coordinator()

    assert coord.try_delete(order).ok
    assert order.deleted_at == FIXED_NOW

    assert coord.try_restore(order).ok
    assert order.deleted_at is None
    assert order.status_id == "cancelled"


@pytest.mark.parametrize("status", ["deposit_50", "confirmed_50", "confirmed_cod", "delivering", "completed"])
def test_in_flight_orders_cannot_be_deleted(status):
    order = Subject(id=1, status_id=status)

    result = coordinator().try_delete(order)

    assert result.error.code == ErrorCode.CONFLICT
    assert order.deleted_at is None


@pytest.mark.parametrize("status", ["pending", "refund", "cancelled"])
def test_other_orders_can_be_deleted(status):
    assert coordinator().try_delete(Subject(id=1, status_id=status)).ok


def test_delete_twice_is_not_found():
    order = Subject(id=1, status_id="pending")
    coord = coordinator()
    coord.try_delete(order)

    result = coord.try_delete(order)

    assert result.error.code == ErrorCode.NOT_FOUND
    assert result.error.subject_id == 1


def test_restore_twice_is_bad_request():
    order = Subject(id=1, status_id="pending", deleted_at=FIXED_NOW)
    coord = coordinator()

    assert coord.try_restore(order).ok
    assert coord.try_restore(order).error.code == ErrorCode.BAD_REQUEST


def test_restore_missing_is_not_found():
    assert coordinator().try_restore(None).error.code == ErrorCode.NOT_FOUND


def test_only_cancelled_receipts_can_be_deleted():
    coord = SoftDeleteCoordinator(RECEIPT_STATUSES, label="recibo", clock=fixed_clock)
    assert coord.try_delete(Subject(id=1, status_id="working")).error.code == ErrorCode.CONFLICT
    assert coord.try_delete(Subject(id=2, status_id="finish")).error.code == ErrorCode.CONFLICT
    assert coord.try_delete(Subject(id=3, status_id="cancel")).ok


def test_statusless_entities_are_always_deletable():
    coord = SoftDeleteCoordinator(None, label="registro de marca", clock=fixed_clock)
    brand = Subject(id=1)
    assert coord.try_delete(brand).ok
    assert brand.deleted_at == FIXED_NOW


def test_missing_and_already_deleted_have_distinct_messages():
    coord = coordinator()

    missing = coord.try_delete(None, subject_id=77)
    deleted = coord.try_delete(Subject(id=5, status_id="pending", deleted_at=FIXED_NOW))

    assert missing.error.message == "Pedido 77 no encontrado"
    assert deleted.error.message == "Pedido 5 ya fue eliminado"
    assert "None" not in coord.try_delete(None).error.message
