"""
Fixtures compartidas de la suite de tests.

- Base SQLite en memoria (StaticPool) recreada en cada test
- TestClient con get_db y get_current_user sobreescritos
- Fábricas de variantes, proveedores, pedidos y recibos
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import Base, get_db
from app.core.auth.dependencies import get_current_user
from app.main import app
from app.shared.database.models import (
    Brand, Input, InputInfo, Output, OutputInfo, ProductVariant, Supplier, User,
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Session:
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def admin_user(db_session) -> User:
    user = User(
        email="admin@stockflow.local",
        password_hash="not-a-real-hash",
        first_name="Ana",
        last_name="Admin",
        role="admin",
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def override_db(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_db, admin_user) -> TestClient:
    app.dependency_overrides[get_current_user] = lambda: admin_user
    return TestClient(app)


# ---------------------------------------------------------------------------
# Fábricas
# ---------------------------------------------------------------------------

@pytest.fixture
def make_variant(db_session):
    counter = {"n": 0}

    def _make(stock: int = 10, price: str = "10.00", deleted: bool = False) -> ProductVariant:
        counter["n"] += 1
        variant = ProductVariant(
            sku=f"SKU-{counter['n']:04d}",
            name=f"Variante {counter['n']}",
            unit_price=Decimal(price),
            stock_quantity=stock,
            deleted_at=datetime(2024, 1, 1) if deleted else None,
        )
        db_session.add(variant)
        db_session.commit()
        return variant

    return _make


@pytest.fixture
def make_supplier(db_session):
    def _make(deleted: bool = False) -> Supplier:
        supplier = Supplier(name="Proveedor", deleted_at=datetime(2024, 1, 1) if deleted else None)
        db_session.add(supplier)
        db_session.commit()
        return supplier

    return _make


@pytest.fixture
def make_brand(db_session):
    def _make(name: str = "Marca", deleted: bool = False) -> Brand:
        brand = Brand(name=name, deleted_at=datetime(2024, 1, 1) if deleted else None)
        db_session.add(brand)
        db_session.commit()
        return brand

    return _make


def _lines(model, items: List[Dict]):
    return [
        model(
            product_variant_id=item["variant"].id,
            quantity=item.get("quantity", 1),
            unit_price=Decimal(item.get("unit_price", "10.00")),
            position=index,
        )
        for index, item in enumerate(items)
    ]


@pytest.fixture
def make_order(db_session, make_variant):
    def _make(status: str = "pending", items: Optional[List[Dict]] = None, deleted: bool = False) -> Output:
        items = items or [{"variant": make_variant(), "quantity": 1}]
        order = Output(
            customer_name="Cliente",
            status_id=status,
            deleted_at=datetime(2024, 1, 1) if deleted else None,
            lines=_lines(OutputInfo, items),
        )
        db_session.add(order)
        db_session.commit()
        return order

    return _make


@pytest.fixture
def make_receipt(db_session, make_variant):
    def _make(status: str = "working", items: Optional[List[Dict]] = None,
              supplier: Optional[Supplier] = None, deleted: bool = False) -> Input:
        items = items or [{"variant": make_variant(stock=0), "quantity": 5}]
        receipt = Input(
            supplier_id=supplier.id if supplier else None,
            status_id=status,
            deleted_at=datetime(2024, 1, 1) if deleted else None,
            lines=_lines(InputInfo, items),
        )
        db_session.add(receipt)
        db_session.commit()
        return receipt

    return _make
