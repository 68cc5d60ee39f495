from app.shared.database.models import Brand

BASE = "/api/v1/brands"


def test_create_and_list_brands(client):
    resp = client.post(BASE, json={"name": "  Acme  "})

    assert resp.status_code == 201
    assert resp.json()["name"] == "Acme"
    assert client.get(BASE).json()["total"] == 1


def test_delete_many_brands_is_all_or_nothing(client, db_session, make_brand):
    active = make_brand("Activa")
    deleted = make_brand("Borrada", deleted=True)

    resp = client.post(f"{BASE}/delete-many", json={"ids": [active.id, deleted.id]})

    assert resp.status_code == 404
    assert resp.json()["detail"]["details"]["missing_ids"] == [deleted.id]
    db_session.expire_all()
    assert db_session.get(Brand, active.id).deleted_at is None


def test_brand_delete_and_restore(client, make_brand):
    brand = make_brand()

    assert client.delete(f"{BASE}/{brand.id}").status_code == 200
    assert client.get(f"{BASE}/deleted").json()["total"] == 1
    assert client.delete(f"{BASE}/{brand.id}").status_code == 404

    resp = client.post(f"{BASE}/{brand.id}/restore")
    assert resp.status_code == 200
    assert resp.json()["deleted_at"] is None
    assert client.post(f"{BASE}/{brand.id}/restore").status_code == 400


def test_restore_many_brands(client, make_brand):
    brands = [make_brand(f"Marca {i}", deleted=True) for i in range(3)]

    resp = client.post(f"{BASE}/restore-many", json={"ids": [b.id for b in brands]})

    assert resp.status_code == 200
    assert resp.json()["affected_count"] == 3
