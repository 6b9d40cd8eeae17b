"""Pytest fixtures for orderdesk tests."""

from decimal import Decimal
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from orderdesk.celery_worker import celery_app
from orderdesk.data import models  # noqa: F401
from orderdesk.data.database import Base, build_engine, get_db
from orderdesk.data.models import ProductModel
from orderdesk.data.seed import seed
from orderdesk.domain.schemas import ProductOut
from orderdesk.repos.product_repo import CatalogRepo
from orderdesk.services.lock_service import LocalCommitLock
from orderdesk.services.order_service import OrderService
from orderdesk.tasks.invoice import send_invoice_task


class FakeCatalog:
    """Dict-backed catalog provider for engine tests that need no database."""

    def __init__(self, products: List[ProductOut]):
        self.products: Dict[str, ProductOut] = {p.id: p for p in products}

    def get_product(self, product_id: str) -> Optional[ProductOut]:
        return self.products.get(product_id)

    def list_products(self, search: Optional[str] = None) -> List[ProductOut]:
        return [p for p in self.products.values() if not search or search.lower() in p.name.lower()]

    def apply_inventory_delta(self, product_id: str, delta: int) -> ProductOut:
        product = self.products[product_id]
        updated = product.model_copy(update={"inventory": product.inventory + delta})
        self.products[product_id] = updated
        return updated


@pytest.fixture
def fake_catalog():
    return FakeCatalog(
        [
            ProductOut(id="A", name="Product A", price=Decimal("100.00"), inventory=5),
            ProductOut(id="B", name="Product B", price=Decimal("19.99"), inventory=10),
            ProductOut(id="C", name="Product C", price=Decimal("0.10"), inventory=1000),
            ProductOut(id="Z", name="Sold out", price=Decimal("5.00"), inventory=0),
        ]
    )


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    eng = build_engine("sqlite://")
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def catalog(db):
    """Products A (100.00 x5) and B (19.99 x10) in the database."""
    db.add_all(
        [
            ProductModel(id="A", name="Product A", price=Decimal("100.00"), inventory=5),
            ProductModel(id="B", name="Product B", price=Decimal("19.99"), inventory=10),
        ]
    )
    db.commit()
    return CatalogRepo(db)


@pytest.fixture
def order_service(db, catalog):
    return OrderService(db, catalog=catalog, lock=LocalCommitLock(timeout=1))


@pytest.fixture
def client(session_factory):
    """API client bound to the per-test database, seeded with the static catalog."""
    from orderdesk.main import create_app

    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    session = session_factory()
    seed(session)
    session.close()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def eager_celery(monkeypatch):
    """Run Celery tasks inline and keep their results in the in-memory backend."""
    # a bound task copies task_store_eager_result only once, at bind time
    monkeypatch.setattr(send_invoice_task, "store_eager_result", True)
    previous = {
        key: celery_app.conf.get(key)
        for key in ("task_always_eager", "task_eager_propagates", "task_store_eager_result")
    }
    celery_app.conf.update(
        task_always_eager=True,
        task_eager_propagates=True,
        task_store_eager_result=True,
    )
    yield celery_app
    celery_app.conf.update(previous)
