from decimal import Decimal

from app.shared.database.models import ProductVariant

BASE = "/api/v1/variants"


def test_create_variant(client, make_brand):
    brand = make_brand()

    resp = client.post(BASE, json={
        "brand_id": brand.id, "sku": " ab-1 ", "name": "Zapatilla", "unit_price": "25.50", "stock_quantity": 4,
    })

    assert resp.status_code == 201
    assert resp.json()["sku"] == "AB-1"
    assert Decimal(resp.json()["unit_price"]) == Decimal("25.50")


def test_duplicate_sku_is_conflict(client, make_variant):
    existing = make_variant()

    resp = client.post(BASE, json={"sku": existing.sku, "name": "Copia", "unit_price": "1"})

    assert resp.status_code == 409
    assert resp.json()["detail"]["field"] == "sku"


def test_deleted_brand_is_rejected(client, make_brand):
    brand = make_brand(deleted=True)

    resp = client.post(BASE, json={"brand_id": brand.id, "sku": "X-1", "name": "X", "unit_price": "1"})

    assert resp.status_code == 404
    assert resp.json()["detail"]["field"] == "brand_id"


def test_deleted_variant_is_rejected_in_new_orders(client, make_variant):
    variant = make_variant()
    assert client.delete(f"{BASE}/{variant.id}").status_code == 200

    resp = client.post("/api/v1/orders", json={
        "lines": [{"product_variant_id": variant.id, "quantity": 1, "unit_price": "10.00"}],
    })

    assert resp.status_code == 404
    assert resp.json()["detail"]["details"]["missing_variant_ids"] == [variant.id]


def test_clone_skips_variant_deleted_through_the_api(client, make_variant, make_receipt):
    kept, dropped = make_variant(), make_variant()
    source = make_receipt(items=[{"variant": kept, "quantity": 1}, {"variant": dropped, "quantity": 2}])

    assert client.delete(f"{BASE}/{dropped.id}").status_code == 200
    resp = client.post(f"/api/v1/receipts/{source.id}/clone")

    assert resp.status_code == 201
    assert resp.json()["skipped_variant_ids"] == [dropped.id]


def test_variant_delete_restore_and_bulk(client, db_session, make_variant):
    first, second = make_variant(), make_variant()

    resp = client.post(f"{BASE}/delete-many", json={"ids": [first.id, second.id, 4040]})
    assert resp.status_code == 404
    db_session.expire_all()
    assert db_session.get(ProductVariant, first.id).deleted_at is None

    assert client.post(f"{BASE}/delete-many", json={"ids": [first.id, second.id]}).status_code == 200
    assert client.get(f"{BASE}/deleted").json()["total"] == 2

    assert client.post(f"{BASE}/{first.id}/restore").status_code == 200
    assert client.post(f"{BASE}/{first.id}/restore").status_code == 400
    assert client.post(f"{BASE}/restore-many", json={"ids": [second.id]}).status_code == 200
    assert client.get(BASE).json()["total"] == 2
