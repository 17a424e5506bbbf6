# tests/test_products_api.py
import pytest
from fastapi.testclient import TestClient

from productapi.config import Settings
from productapi.database import ProductStore
from productapi.main import create_app

from conftest import make_products

VALID = {
    "name": "Desk Lamp",
    "description": "LED lamp with dimmer",
    "price": 25,
    "category": "home",
    "inStock": True,
}


def test_root_is_plain_text(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "Hello world."


def test_list_seed_products(client):
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["limit"] == 5
    assert [p["id"] for p in body["products"]] == ["1", "2", "3"]
    assert body["products"][0] == {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    }


def test_create_accepts_zero_price_and_out_of_stock(client):
    payload = dict(VALID, price=0, inStock=False)
    r = client.post("/api/products", json=payload)
    assert r.status_code == 201
    created = r.json()
    assert created["id"]
    assert {k: v for k, v in created.items() if k != "id"} == payload

    fetched = client.get(f"/api/products/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created


def test_created_ids_are_unique(client):
    ids = {client.post("/api/products", json=VALID).json()["id"] for _ in range(10)}
    assert len(ids) == 10


@pytest.mark.parametrize("field", ["name", "description", "price", "category", "inStock"])
def test_create_missing_field_is_400(client, field):
    payload = {k: v for k, v in VALID.items() if k != field}
    r = client.post("/api/products", json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required fields"}


@pytest.mark.parametrize("field,value", [
    ("name", ""),
    ("description", ""),
    ("category", ""),
    ("price", None),
    ("inStock", None),
])
def test_create_empty_or_null_field_is_400(client, field, value):
    r = client.post("/api/products", json=dict(VALID, **{field: value}))
    assert r.status_code == 400


def test_create_without_body_is_400(client):
    r = client.post("/api/products")
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required fields"}


def test_create_rejected_payload_is_not_stored(client, store):
    client.post("/api/products", json=dict(VALID, name=""))
    assert len(store) == 3


def test_malformed_body_is_400(client):
    r = client.post("/api/products", content="{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}

    r = client.post("/api/products", json=[VALID])
    assert r.status_code == 400
    assert "error" in r.json()


def test_get_unknown_id_is_404(client):
    r = client.get("/api/products/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_put_replaces_everything_but_id(client):
    replacement = {
        "name": "Gaming Laptop",
        "description": "32GB RAM",
        "price": 0,
        "category": "gaming",
        "inStock": False,
    }
    r = client.put("/api/products/1", json=replacement)
    assert r.status_code == 200
    assert r.json() == dict(replacement, id="1")
    assert client.get("/api/products/1").json() == dict(replacement, id="1")
    # position in the listing is kept
    assert client.get("/api/products").json()["products"][0]["id"] == "1"


def test_put_ignores_id_in_body(client):
    r = client.put("/api/products/2", json=dict(VALID, id="999"))
    assert r.status_code == 200
    assert r.json()["id"] == "2"
    assert client.get("/api/products/999").status_code == 404


def test_put_unknown_id_is_404_even_with_invalid_payload(client):
    assert client.put("/api/products/nope", json=VALID).status_code == 404
    r = client.put("/api/products/nope", json={})
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_put_invalid_payload_is_400_and_keeps_record(client):
    before = client.get("/api/products/3").json()
    r = client.put("/api/products/3", json=dict(VALID, description=""))
    assert r.status_code == 400
    assert client.get("/api/products/3").json() == before


def test_delete_then_get_is_404(client):
    r = client.delete("/api/products/2")
    assert r.status_code == 204
    assert r.content == b""
    assert client.get("/api/products/2").status_code == 404
    assert client.get("/api/products").json()["total"] == 2


def test_delete_unknown_id_is_404(client):
    r = client.delete("/api/products/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


# ---------------------------
# Pagination
# ---------------------------
@pytest.fixture
def twelve_client():
    with TestClient(create_app(Settings(), ProductStore(make_products(12)))) as c:
        yield c


def _ids(r):
    return [p["id"] for p in r.json()["products"]]


def test_pagination_pages(twelve_client):
    r = twelve_client.get("/api/products")
    assert _ids(r) == ["1", "2", "3", "4", "5"]

    r = twelve_client.get("/api/products", params={"page": 3})
    assert _ids(r) == ["11", "12"]
    assert r.json()["total"] == 12

    r = twelve_client.get("/api/products", params={"page": 4})
    assert r.status_code == 200
    assert r.json() == {"total": 12, "page": 4, "limit": 5, "products": []}


def test_pagination_custom_limit(twelve_client):
    r = twelve_client.get("/api/products", params={"page": 2, "limit": 4})
    assert _ids(r) == ["5", "6", "7", "8"]
    assert r.json()["limit"] == 4


@pytest.mark.parametrize("page,limit", [("abc", "xyz"), ("0", "0"), ("-2", "-1"), ("", "")])
def test_pagination_bad_values_fall_back_to_defaults(twelve_client, page, limit):
    r = twelve_client.get("/api/products", params={"page": page, "limit": limit})
    assert r.status_code == 200
    body = r.json()
    assert body["page"] == 1
    assert body["limit"] == 5
    assert _ids(r) == ["1", "2", "3", "4", "5"]


# ---------------------------
# Category filter
# ---------------------------
def test_category_filter_lowercases_query(client):
    r = client.get("/api/products", params={"category": "Electronics"})
    body = r.json()
    assert body["total"] == 2
    assert _ids(r) == ["1", "2"]


def test_category_filter_matches_mixed_case_stored_values(client):
    client.post("/api/products", json=dict(VALID, category="Electronics"))
    r = client.get("/api/products", params={"category": "electronics"})
    assert r.json()["total"] == 3


def test_category_filter_unknown_is_empty(client):
    r = client.get("/api/products", params={"category": "garden"})
    assert r.json() == {"total": 0, "page": 1, "limit": 5, "products": []}


def test_category_filter_then_paginate(client):
    r = client.get("/api/products", params={"category": "electronics", "limit": 1, "page": 2})
    assert r.json()["total"] == 2
    assert _ids(r) == ["2"]


# ---------------------------
# Search and stats
# ---------------------------
def test_search_lap_finds_laptop(client):
    r = client.get("/api/products/search", params={"q": "lap"})
    assert r.status_code == 200
    assert [p["name"] for p in r.json()] == ["Laptop"]


def test_search_is_case_insensitive(client):
    r = client.get("/api/products/search", params={"q": "COFFEE"})
    assert [p["id"] for p in r.json()] == ["3"]


def test_search_without_query_returns_all(client):
    r = client.get("/api/products/search")
    assert r.status_code == 200
    assert len(r.json()) == 3


def test_search_no_match_is_empty_list(client):
    r = client.get("/api/products/search", params={"q": "zzz"})
    assert r.status_code == 200
    assert r.json() == []


def test_stats_on_seed_data(client):
    r = client.get("/api/products/stats")
    assert r.status_code == 200
    assert r.json() == {"electronics": 2, "kitchen": 1}


def test_stats_follow_mutations(client):
    client.delete("/api/products/3")
    client.post("/api/products", json=VALID)
    assert client.get("/api/products/stats").json() == {"electronics": 2, "home": 1}


def test_literal_routes_are_not_ids(store):
    # a product whose id collides with a literal path segment is still
    # shadowed by the literal route
    store.reset([dict(VALID, id="search"), dict(VALID, id="stats", category="x")])
    with TestClient(create_app(Settings(), store)) as c:
        assert isinstance(c.get("/api/products/search").json(), list)
        assert c.get("/api/products/stats").json() == {"home": 1, "x": 1}


def test_snake_case_in_stock_alone_is_400(client, store):
    payload = {k: v for k, v in VALID.items() if k != "inStock"}
    payload["in_stock"] = True
    r = client.post("/api/products", json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required fields"}
    assert len(store) == 3


def test_non_string_category_does_not_break_stats(client):
    r = client.post("/api/products", json=dict(VALID, category=["x"]))
    assert r.status_code == 201
    stats = client.get("/api/products/stats")
    assert stats.status_code == 200
    assert stats.json() == {"electronics": 2, "kitchen": 1, "['x']": 1}


@pytest.mark.parametrize("page", ["2.5", "2abc", " 2"])
def test_pagination_uses_leading_integer(twelve_client, page):
    r = twelve_client.get("/api/products", params={"page": page})
    assert r.json()["page"] == 2
    assert _ids(r) == ["6", "7", "8", "9", "10"]
