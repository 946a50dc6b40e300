"""Shared fixtures: in-memory SQLite storage, a deterministic clock, a loaded store."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from stockroom.core.config import Settings
from stockroom.main import create_app
from stockroom.schemas.product import Product, ProductStatus
from stockroom.services.persistence import InventoryPersistence
from stockroom.services.storage import KeyValueStorage
from stockroom.store.store import Store


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> None:
        self.now += timedelta(**delta)


@pytest.fixture
def test_settings():
    return Settings(DATABASE_URL="sqlite://", LOG_LEVEL="WARNING")


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def storage():
    storage = KeyValueStorage.from_url("sqlite://")
    yield storage
    storage.close()


@pytest.fixture
def persistence(storage):
    return InventoryPersistence(storage)


@pytest.fixture
def store(persistence, test_settings, clock):
    store = Store(persistence, settings=test_settings, clock=clock)
    assert store.load_data()
    return store


@pytest.fixture
def make_product():
    counter = iter(range(1, 10_000))

    def factory(**overrides) -> Product:
        n = next(counter)
        created = datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(days=n)
        fields = {
            "id": f"p{n}",
            "name": f"Product {n}",
            "description": "",
            "category_id": "1",
            "price": 10.0,
            "stock": 10,
            "min_stock": 5,
            "sku": f"SKU-{n:03d}",
            "status": ProductStatus.ACTIVE,
            "created_at": created,
            "updated_at": created,
        }
        fields.update(overrides)
        return Product(**fields)

    return factory


@pytest.fixture
def client(test_settings):
    with TestClient(create_app(test_settings)) as client:
        yield client
