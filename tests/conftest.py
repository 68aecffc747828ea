"""Shared fixtures: every test gets its own app and an empty store."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.database import ProductStore
from app.main import create_app


WIDGET = {"name": "Widget", "description": "d", "price": 9.99, "category": "Tools", "inStock": True}


def snapshot(store: ProductStore):
    """Synchronous view of the store contents."""
    return asyncio.run(store.snapshot())


@pytest.fixture
def store():
    return ProductStore()


@pytest.fixture
def app(store):
    return create_app(store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"x-api-key": get_settings().api_key}


@pytest.fixture
def make_product(client, auth_headers):
    """Create a product through the API; keyword overrides replace WIDGET fields."""
    def _make(**overrides):
        body = {**WIDGET, **overrides}
        r = client.post("/api/products", json=body, headers=auth_headers)
        assert r.status_code == 201, r.text
        return r.json()
    return _make
