# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from productapi.config import Settings
from productapi.database import ProductStore
from productapi.main import create_app


@pytest.fixture
def store():
    return ProductStore.seeded()


@pytest.fixture
def app(store):
    return create_app(Settings(), store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def make_products(n):
    return [
        {
            "id": str(i),
            "name": f"Item {i}",
            "description": f"Item number {i}",
            "price": i,
            "category": "misc",
            "inStock": True,
        }
        for i in range(1, n + 1)
    ]
