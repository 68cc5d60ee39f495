from decimal import Decimal

from app.shared.database.models import Output, ProductVariant

BASE = "/api/v1/orders"


def line(variant, quantity=1, unit_price="10.00"):
    return {"product_variant_id": variant.id, "quantity": quantity, "unit_price": unit_price}


def test_create_order_starts_pending(client, make_variant, admin_user):
    variant = make_variant()

    resp = client.post(BASE, json={"customer_name": "Cliente", "lines": [line(variant, 2)]})

    assert resp.status_code == 201
    body = resp.json()
    assert body["status_id"] == "pending"
    assert body["created_by"] == admin_user.id
    assert body["finished_by"] is None
    assert Decimal(body["total_amount"]) == Decimal("20")


def test_create_order_with_inactive_variant_is_404(client, make_variant):
    variant = make_variant(deleted=True)

    resp = client.post(BASE, json={"lines": [line(variant)]})

    assert resp.status_code == 404
    assert resp.json()["detail"]["details"]["missing_variant_ids"] == [variant.id]


def test_create_order_directly_completed_is_rejected(client, make_variant):
    resp = client.post(BASE, json={"status_id": "completed", "lines": [line(make_variant())]})
    assert resp.status_code == 400


def test_create_order_with_unknown_status_fails_validation(client, make_variant):
    resp = client.post(BASE, json={"status_id": "shipped", "lines": [line(make_variant())]})
    assert resp.status_code == 422


def test_pending_to_confirmed_cod(client, make_order):
    order = make_order()

    resp = client.patch(f"{BASE}/{order.id}/status", json={"status_id": "confirmed_cod"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["status_id"] == "confirmed_cod"
    assert body["finished_by"] is None
    assert body["last_status_changed_at"] is not None


def test_skipping_states_is_invalid_transition(client, make_order):
    order = make_order(status="deposit_50")

    resp = client.patch(f"{BASE}/{order.id}/status", json={"status_id": "completed"})

    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["error_code"] == "INVALID_TRANSITION"
    assert detail["details"]["allowed"] == ["confirmed_50", "refund"]


def test_completing_order_deducts_stock_and_stamps_actor(client, db_session, make_variant, make_order, admin_user):
    variant = make_variant(stock=10)
    order = make_order(status="delivering", items=[{"variant": variant, "quantity": 4}])

    resp = client.patch(f"{BASE}/{order.id}/status", json={"status_id": "completed"})

    assert resp.status_code == 200
    assert resp.json()["finished_by"] == admin_user.id
    assert db_session.get(ProductVariant, variant.id).stock_quantity == 6


def test_completing_without_stock_is_rejected(client, db_session, make_variant, make_order):
    variant = make_variant(stock=1)
    order = make_order(status="delivering", items=[{"variant": variant, "quantity": 3}])

    resp = client.patch(f"{BASE}/{order.id}/status", json={"status_id": "completed"})

    assert resp.status_code == 400
    shortage = resp.json()["detail"]["details"]["shortages"][0]
    assert shortage == {"product_variant_id": variant.id, "available": 1, "needed": 3, "missing": 2}
    db_session.expire_all()
    assert db_session.get(Output, order.id).status_id == "delivering"
    assert db_session.get(ProductVariant, variant.id).stock_quantity == 1


def test_status_change_on_deleted_order_is_conflict(client, make_order):
    order = make_order(deleted=True)

    resp = client.patch(f"{BASE}/{order.id}/status", json={"status_id": "cancelled"})

    assert resp.status_code == 409


def test_status_change_on_missing_order_is_404(client):
    assert client.patch(f"{BASE}/999/status", json={"status_id": "cancelled"}).status_code == 404


def test_update_only_while_pending(client, make_variant, make_order):
    pending = make_order()
    confirmed = make_order(status="confirmed_cod")
    variant = make_variant()

    resp = client.put(f"{BASE}/{pending.id}", json={"customer_name": "Otro", "lines": [line(variant, 3)]})
    assert resp.status_code == 200
    assert resp.json()["customer_name"] == "Otro"
    assert [l["quantity"] for l in resp.json()["lines"]] == [3]

    resp = client.put(f"{BASE}/{confirmed.id}", json={"lines": [line(variant)]})
    assert resp.status_code == 409


def test_delete_restore_cycle(client, make_order):
    order = make_order(status="pending")

    assert client.delete(f"{BASE}/{order.id}").status_code == 200
    assert client.get(f"{BASE}/{order.id}").json()["deleted_at"] is not None

    resp = client.delete(f"{BASE}/{order.id}")
    assert resp.status_code == 404

    resp = client.post(f"{BASE}/{order.id}/restore")
    assert resp.status_code == 200
    assert resp.json()["deleted_at"] is None
    assert resp.json()["status_id"] == "pending"

    resp = client.post(f"{BASE}/{order.id}/restore")
    assert resp.status_code == 400
    assert resp.json()["detail"]["error_code"] == "BAD_REQUEST"


def test_in_flight_order_cannot_be_deleted(client, make_order):
    order = make_order(status="delivering")

    resp = client.delete(f"{BASE}/{order.id}")

    assert resp.status_code == 409
    assert resp.json()["detail"]["error_code"] == "CONFLICT"


def test_delete_many_with_missing_id_changes_nothing(client, db_session, make_order):
    first, second = make_order(), make_order()

    resp = client.post(f"{BASE}/delete-many", json={"ids": [first.id, second.id, 9999]})

    assert resp.status_code == 404
    assert resp.json()["detail"]["details"]["missing_ids"] == [9999]
    db_session.expire_all()
    assert db_session.get(Output, first.id).deleted_at is None
    assert db_session.get(Output, second.id).deleted_at is None


def test_delete_many_and_restore_many(client, make_order):
    first, second = make_order(), make_order(status="cancelled")

    resp = client.post(f"{BASE}/delete-many", json={"ids": [first.id, second.id]})
    assert resp.status_code == 200
    assert resp.json()["affected_count"] == 2

    deleted = client.get(f"{BASE}/deleted").json()
    assert deleted["total"] == 2

    resp = client.post(f"{BASE}/restore-many", json={"ids": [first.id, second.id]})
    assert resp.status_code == 200
    assert [o["status_id"] for o in resp.json()["orders"]] == ["pending", "cancelled"]
    assert client.get(BASE).json()["total"] == 2


def test_bulk_status_is_all_or_nothing(client, db_session, make_order):
    pending = make_order()
    completed = make_order(status="completed")

    resp = client.patch(f"{BASE}/status", json={"ids": [pending.id, completed.id], "status_id": "deposit_50"})

    assert resp.status_code == 400
    assert resp.json()["detail"]["subject_id"] == completed.id
    db_session.expire_all()
    assert db_session.get(Output, pending.id).status_id == "pending"


def test_bulk_completion_checks_aggregated_stock(client, db_session, make_variant, make_order):
    variant = make_variant(stock=10)
    first = make_order(status="delivering", items=[{"variant": variant, "quantity": 6}])
    second = make_order(status="delivering", items=[{"variant": variant, "quantity": 6}])

    resp = client.patch(f"{BASE}/status", json={"ids": [first.id, second.id], "status_id": "completed"})

    assert resp.status_code == 400
    assert resp.json()["detail"]["details"]["shortages"][0]["needed"] == 12
    db_session.expire_all()
    assert db_session.get(Output, first.id).status_id == "delivering"
    assert db_session.get(ProductVariant, variant.id).stock_quantity == 10


def test_bulk_completion_succeeds_with_enough_stock(client, db_session, make_variant, make_order, admin_user):
    variant = make_variant(stock=12)
    first = make_order(status="delivering", items=[{"variant": variant, "quantity": 6}])
    second = make_order(status="delivering", items=[{"variant": variant, "quantity": 6}])

    resp = client.patch(f"{BASE}/status", json={"ids": [first.id, second.id], "status_id": "completed"})

    assert resp.status_code == 200
    assert all(o["finished_by"] == admin_user.id for o in resp.json()["orders"])
    db_session.expire_all()
    assert db_session.get(ProductVariant, variant.id).stock_quantity == 0


def test_empty_id_list_is_rejected(client):
    assert client.post(f"{BASE}/delete-many", json={"ids": []}).status_code == 422


def test_allowed_statuses(client, make_order):
    pending = make_order()
    deleted = make_order(deleted=True)

    body = client.get(f"{BASE}/{pending.id}/allowed-statuses").json()
    assert body["allowed"] == ["cancelled", "confirmed_cod", "deposit_50", "refund"]
    assert body["is_terminal"] is False

    assert client.get(f"{BASE}/{deleted.id}/allowed-statuses").json()["allowed"] == []


def test_missing_order_messages_name_the_requested_id(client):
    for resp in (client.delete(f"{BASE}/424242"), client.post(f"{BASE}/424242/restore")):
        assert resp.status_code == 404
        assert resp.json()["detail"]["message"] == "Pedido 424242 no encontrado"
        assert resp.json()["detail"]["subject_id"] == 424242
