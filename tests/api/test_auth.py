import pytest
from fastapi.testclient import TestClient

from app.core.auth.service import AuthService
from app.main import app
from app.shared.database.models import User


@pytest.fixture
def anonymous_client(override_db):
    return TestClient(app)


@pytest.fixture
def staff_user(db_session):
    user = User(
        email="staff@stockflow.local",
        password_hash=AuthService.get_password_hash("staff123"),
        first_name="Juan",
        last_name="Operador",
        role="staff",
    )
    db_session.add(user)
    db_session.commit()
    return user


def test_login_and_me(anonymous_client, staff_user):
    resp = anonymous_client.post("/api/v1/auth/login-json", json={"email": staff_user.email, "password": "staff123"})

    assert resp.status_code == 200
    token = resp.json()["access_token"]
    assert resp.json()["user"]["role"] == "staff"

    me = anonymous_client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == staff_user.email


def test_wrong_password_is_401(anonymous_client, staff_user):
    resp = anonymous_client.post("/api/v1/auth/login-json", json={"email": staff_user.email, "password": "wrong-pass"})
    assert resp.status_code == 401


def test_staff_cannot_delete_orders(anonymous_client, staff_user):
    token = AuthService.create_access_token({"user_id": staff_user.id, "email": staff_user.email, "role": "staff"})

    resp = anonymous_client.post(
        "/api/v1/orders/delete-many",
        json={"ids": [1]},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert resp.status_code == 403


def test_missing_token_is_rejected(anonymous_client):
    assert anonymous_client.get("/api/v1/orders").status_code in (401, 403)


def test_health(anonymous_client):
    assert anonymous_client.get("/health").json()["status"] == "healthy"
