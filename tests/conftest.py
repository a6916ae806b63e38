import pytest
from fastapi.testclient import TestClient

from crud_api.app.core.db import ResourceStore
from crud_api.app.main import create_app
from crud_api.app.services.resource_repository import ResourceRepository
from crud_api.app.services.swap_service import latest_prices


PRICE_RECORDS = [
    {"currency": "ETH", "date": "2023-08-29T07:10:40.000Z", "price": 1645.93},
    {"currency": "ETH", "date": "2023-08-29T07:10:52.000Z", "price": 1650.00},
    {"currency": "USDC", "date": "2023-08-29T07:10:30.000Z", "price": 1.0},
    {"currency": "ATOM", "date": "2023-08-29T07:10:50.000Z", "price": 7.18},
    {"currency": "BAD", "date": "2023-08-29T07:10:50.000Z", "price": "n/a"},
]


class FakePriceFeed:
    """In-memory stand-in for the remote price feed."""

    def __init__(self, records=None):
        self.records = list(PRICE_RECORDS if records is None else records)
        self.calls = 0

    def latest_prices(self):
        self.calls += 1
        return latest_prices(self.records)


@pytest.fixture
def store():
    store = ResourceStore(":memory:").open()
    store.ensure_schema()
    yield store
    store.close()


@pytest.fixture
def repo(store):
    return ResourceRepository(store)


@pytest.fixture
def price_records():
    return [dict(record) for record in PRICE_RECORDS]


@pytest.fixture
def price_feed():
    return FakePriceFeed()


@pytest.fixture
def client(store, price_feed):
    app = create_app(store=store, price_feed=price_feed)
    with TestClient(app) as c:
        yield c
