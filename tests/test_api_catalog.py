from datetime import datetime, timedelta, timezone
from decimal import Decimal

from tests.conftest import make_admin, make_product, register

NEW_PRODUCT = {
    "name": "Distressed Denim Jacket",
    "description": "Vintage wash denim jacket.",
    "price": "85.00",
    "category": "Jackets",
    "images": ["https://img.example/jacket.jpg"],
    "stock": 30,
    "sizes": ["S", "M", "L"],
}


def test_list_products_filters_and_sorts(client, app_db):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    make_product(app_db, "Street Oversized Tee", "35.00", "T-Shirts", created_at=base)
    make_product(app_db, "Urban Hoodie", "55.00", "Hoodies", created_at=base + timedelta(days=1))
    make_product(app_db, "Zip Hoodie", "45.00", "Hoodies", created_at=base + timedelta(days=2))

    newest = client.get("/api/products").json()
    assert [p["name"] for p in newest] == ["Zip Hoodie", "Urban Hoodie", "Street Oversized Tee"]

    hoodies = client.get("/api/products", params={"category": "Hoodies", "sort": "price_asc"}).json()
    assert [p["name"] for p in hoodies] == ["Zip Hoodie", "Urban Hoodie"]

    found = client.get("/api/products", params={"search": "tEe"}).json()
    assert [p["name"] for p in found] == ["Street Oversized Tee"]
    assert Decimal(found[0]["price"]) == Decimal("35.00")


def test_invalid_sort_is_a_validation_error(client):
    resp = client.get("/api/products", params={"sort": "cheapest"})

    assert resp.status_code == 400
    assert resp.json()["field"] == "sort"


def test_get_product(client, app_db):
    product = make_product(app_db, "Urban Hoodie", "55.00", "Hoodies")

    resp = client.get(f"/api/products/{product.id}")

    assert resp.status_code == 200
    assert resp.json()["name"] == "Urban Hoodie"


def test_get_missing_product_is_404_with_message(client):
    resp = client.get("/api/products/999999")

    assert resp.status_code == 404
    assert resp.json() == {"message": "Product not found"}


def test_create_product_requires_session(client):
    resp = client.post("/api/products", json=NEW_PRODUCT)
    assert resp.status_code == 401


def test_create_product_requires_admin(client):
    register(client, "alice")

    resp = client.post("/api/products", json=NEW_PRODUCT)

    assert resp.status_code == 403


def test_admin_creates_product(app, client):
    register(client, "root")
    make_admin(app, "root")

    resp = client.post("/api/products", json=NEW_PRODUCT)

    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] > 0
    assert body["created_at"]
    assert client.get(f"/api/products/{body['id']}").status_code == 200


def test_create_product_needs_an_image(app, client):
    register(client, "root")
    make_admin(app, "root")

    resp = client.post("/api/products", json={**NEW_PRODUCT, "images": []})

    assert resp.status_code == 400
    assert resp.json()["field"] == "images"


def test_create_product_rejects_negative_price(app, client):
    register(client, "root")
    make_admin(app, "root")

    resp = client.post("/api/products", json={**NEW_PRODUCT, "price": "-1.00"})

    assert resp.status_code == 400
