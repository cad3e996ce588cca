"""Shared fixtures for UCP store tests."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from ucp_store.api.main import create_app
from ucp_store.capabilities.checkout import CheckoutEngine
from ucp_store.catalog import Catalog
from ucp_store.config import StoreSettings, load_settings
from ucp_store.models.catalog import CatalogItem
from ucp_store.sessions import InMemoryCheckoutSessionStore

START = datetime(2026, 1, 11, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture
def catalog_items():
    return [
        CatalogItem(id="latte", title="Caramel Latte", price=550, currency="USD"),
        CatalogItem(id="mocha", title="Chocolate Mocha", price=600, currency="USD"),
        CatalogItem(id="croissant", title="Butter Croissant", price=350, currency="USD"),
        CatalogItem(id="sandwich", title="Turkey Sandwich", price=895, currency="USD", in_stock=False),
        CatalogItem(id="stroopwafel", title="Stroopwafel", price=250, currency="EUR"),
    ]


@pytest.fixture
def catalog(catalog_items):
    return Catalog(catalog_items)


@pytest.fixture
def store():
    return InMemoryCheckoutSessionStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(catalog, store, clock):
    return CheckoutEngine(catalog=catalog, store=store, clock=clock)


@pytest.fixture
def settings():
    return StoreSettings(environment="test", port=3000, public_url="http://store.test")


@pytest.fixture
def app(settings, engine):
    return create_app(settings=settings, engine=engine)


@pytest.fixture
def api_client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def app_transport(app):
    """An httpx transport that serves requests from the test app in-process."""
    test_client = TestClient(app)

    def forward(request: httpx.Request) -> httpx.Response:
        response = test_client.request(
            request.method,
            request.url.raw_path.decode("ascii"),
            content=request.content,
            headers={k: v for k, v in request.headers.items() if k not in ("host", "content-length")},
        )
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)

    yield httpx.MockTransport(forward)
    test_client.close()
