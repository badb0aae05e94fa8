"""Integration tests for the cart endpoints via TestClient."""

import pytest


@pytest.fixture
def headers(make_user, bearer):
    return bearer(make_user())


class TestCartEndpoints:
    def test_requires_token(self, client):
        assert client.get("/cart").status_code == 401
        assert client.post("/cart", json={"items": []}).status_code == 401

    def test_empty_cart(self, client, headers):
        response = client.get("/cart", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"items": []}

    def test_write_then_read(self, client, headers, make_product):
        lamp = make_product(name="Lamp", price_cents=1999)
        response = client.post(
            "/cart", json={"items": [{"product_id": str(lamp.id), "quantity": 2}]}, headers=headers
        )
        assert response.status_code == 200
        assert response.json() == {"ok": True}

        items = client.get("/cart", headers=headers).json()["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 2
        assert items[0]["unit_price_cents"] == 1999
        assert items[0]["name"] == "Lamp"

    def test_unknown_products_still_acknowledged(self, client, headers):
        response = client.post(
            "/cart", json={"items": [{"product_id": "ghost", "quantity": 1}]}, headers=headers
        )
        assert response.status_code == 200
        assert client.get("/cart", headers=headers).json() == {"items": []}

    def test_zero_quantity_removes(self, client, headers, make_product):
        lamp = make_product(name="Lamp")
        client.post("/cart", json={"items": [{"product_id": str(lamp.id), "quantity": 1}]}, headers=headers)
        client.post("/cart", json={"items": [{"product_id": str(lamp.id), "quantity": 0}]}, headers=headers)
        assert client.get("/cart", headers=headers).json() == {"items": []}
