from app.shared.database.models import Supplier

BASE = "/api/v1/suppliers"


def test_create_and_get_supplier(client):
    resp = client.post(BASE, json={"name": " Distribuidora Norte ", "phone": "555-0101"})

    assert resp.status_code == 201
    supplier_id = resp.json()["id"]
    assert client.get(f"{BASE}/{supplier_id}").json()["name"] == "Distribuidora Norte"
    assert client.get(BASE).json()["total"] == 1


def test_deleted_supplier_is_rejected_for_new_receipts(client, make_supplier, make_variant):
    supplier = make_supplier()

    assert client.delete(f"{BASE}/{supplier.id}").status_code == 200

    resp = client.post("/api/v1/receipts", json={
        "supplier_id": supplier.id,
        "lines": [{"product_variant_id": make_variant().id, "quantity": 1, "unit_price": "1.00"}],
    })
    assert resp.status_code == 404
    assert resp.json()["detail"]["field"] == "supplier_id"

    assert client.post(f"{BASE}/{supplier.id}/restore").status_code == 200
    resp = client.post("/api/v1/receipts", json={
        "supplier_id": supplier.id,
        "lines": [{"product_variant_id": make_variant().id, "quantity": 1, "unit_price": "1.00"}],
    })
    assert resp.status_code == 201


def test_supplier_with_working_receipt_cannot_be_deleted(client, db_session, make_supplier, make_receipt):
    supplier = make_supplier()
    make_receipt(status="working", supplier=supplier)

    resp = client.delete(f"{BASE}/{supplier.id}")

    assert resp.status_code == 400
    assert resp.json()["detail"]["details"]["blocked_ids"] == [supplier.id]
    db_session.expire_all()
    assert db_session.get(Supplier, supplier.id).deleted_at is None


def test_supplier_with_finished_receipts_can_be_deleted(client, make_supplier, make_receipt):
    supplier = make_supplier()
    make_receipt(status="finish", supplier=supplier)

    assert client.delete(f"{BASE}/{supplier.id}").status_code == 200


def test_delete_many_blocked_by_one_supplier_changes_nothing(client, db_session, make_supplier, make_receipt):
    free = make_supplier()
    busy = make_supplier()
    make_receipt(status="working", supplier=busy)

    resp = client.post(f"{BASE}/delete-many", json={"ids": [free.id, busy.id]})

    assert resp.status_code == 400
    assert resp.json()["detail"]["subject_id"] == busy.id
    db_session.expire_all()
    assert db_session.get(Supplier, free.id).deleted_at is None


def test_delete_many_and_restore_many_suppliers(client, make_supplier):
    suppliers = [make_supplier(), make_supplier()]
    ids = [s.id for s in suppliers]

    assert client.post(f"{BASE}/delete-many", json={"ids": ids}).json()["affected_count"] == 2
    assert client.get(f"{BASE}/deleted").json()["total"] == 2

    resp = client.post(f"{BASE}/restore-many", json={"ids": ids + [ids[0]]})
    assert resp.status_code == 200
    assert resp.json()["affected_count"] == 2

    resp = client.post(f"{BASE}/restore-many", json={"ids": ids})
    assert resp.status_code == 404
    assert resp.json()["detail"]["details"]["missing_ids"] == ids


def test_missing_supplier_is_404(client):
    resp = client.delete(f"{BASE}/31337")
    assert resp.status_code == 404
    assert resp.json()["detail"]["message"] == "Proveedor 31337 no encontrado"
