"""
Pytest fixtures for the consumption engine test suite.

Provides:
- A file-backed SQLite database per test (concurrent checkouts need a
  real file so separate connections share it)
- Catalog builders for inventory items, recipes and carts
- A TestClient wired to the test session with the caller's identity stubbed
"""

import os

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import inventory_engine.models  # noqa: F401
from inventory_engine.core.auth import get_current_user
from inventory_engine.database import Base, build_engine, get_db
from inventory_engine.main import app
from inventory_engine.models import BillOfMaterials, InventoryItem, MaterialLine, User
from inventory_engine.schemas.sale import CheckoutItem, CheckoutRequest


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'inventory.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def staff(db):
    user = User(email="cashier@example.com", name="Cashier", role="Staff")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def owner(db):
    user = User(email="owner@example.com", name="Owner", role="Owner")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def make_item(db):
    def _make(product, unit="Pcs", stock=0, limit=None, category="product"):
        item = InventoryItem(
            code=product.upper().replace(" ", "-"),
            product=product,
            category=category,
            unit=unit,
            stock=Decimal(str(stock)),
            limit=Decimal(str(limit)) if limit is not None else None,
        )
        db.add(item)
        db.commit()
        return item

    return _make


@pytest.fixture
def make_bom(db):
    """make_bom(latte, (milk, "0.2", "Litre"), (cup, 1, "Pcs"))"""

    def _make(product, *lines):
        bom = BillOfMaterials(
            product_id=product.id,
            materials=[
                MaterialLine(
                    material_id=material.id,
                    qty=Decimal(str(qty)),
                    unit=unit,
                    position=position,
                )
                for position, (material, qty, unit) in enumerate(lines)
            ],
        )
        db.add(bom)
        db.commit()
        return bom

    return _make


@pytest.fixture
def make_cart():
    """make_cart(actor, (latte, 40, "3.50"), payment_method="Cash")"""

    def _make(actor, *lines, **extra):
        return CheckoutRequest(
            actor_id=actor.id if actor is not None else None,
            items=[
                CheckoutItem(product_id=product.id, quantity=quantity, price=price)
                for product, quantity, price in lines
            ],
            **extra,
        )

    return _make


@pytest.fixture
def cafe(make_item, make_bom):
    """Milk-based drinks: a Latte recipe drawing on Milk, and Cups sold directly."""
    milk = make_item("Milk", unit="Litre", stock=10, limit=2, category="material")
    latte = make_item("Latte", unit="Pcs", stock=0)
    cup = make_item("Cup", unit="Pcs", stock=5, category="packaging")
    make_bom(latte, (milk, "0.2", "Litre"))
    return {"milk": milk, "latte": latte, "cup": cup}


@pytest.fixture
def current_user(staff):
    return staff


@pytest.fixture
def client(db, current_user):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: current_user

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
