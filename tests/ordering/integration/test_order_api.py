"""Integration tests for Order and Product API endpoints via TestClient."""

ADMIN = {"X-User-Id": "admin-001", "X-User-Role": "admin"}
BUYER = {"X-User-Id": "buyer-001", "X-User-Role": "buyer"}
OTHER_BUYER = {"X-User-Id": "buyer-002", "X-User-Role": "buyer"}


def _checkout(client, headers=BUYER):
    return client.post("/orders", headers=headers)


def _place_order(client, list_product, price=3000, quantity=2, headers=BUYER):
    product_id = list_product(price=price)
    client.post("/cart/items", json={"product_id": product_id, "quantity": quantity}, headers=headers)
    response = _checkout(client, headers)
    assert response.status_code == 201
    return response.json()


def _set_status(client, order_id, status, headers=ADMIN):
    return client.patch(f"/orders/{order_id}/status", json={"status": status}, headers=headers)


class TestCheckoutEndpoint:
    def test_checkout(self, client, list_product):
        order = _place_order(client, list_product)

        assert order["status"] == "pending"
        assert order["total_amount"] == 6000
        assert len(order["items"]) == 1

        cart = client.get("/cart", headers=BUYER).json()
        assert cart["items"] == []

    def test_empty_cart(self, client):
        response = _checkout(client)
        assert response.status_code == 400
        assert response.json()["error"] == "empty_cart"


class TestOrderReadEndpoints:
    def test_owner_reads_order(self, client, list_product):
        order = _place_order(client, list_product)

        response = client.get(f"/orders/{order['order_id']}", headers=BUYER)

        assert response.status_code == 200
        assert response.json()["order_id"] == order["order_id"]

    def test_other_buyer_gets_404(self, client, list_product):
        order = _place_order(client, list_product)

        response = client.get(f"/orders/{order['order_id']}", headers=OTHER_BUYER)
        assert response.status_code == 404

        response = client.get(f"/orders/{order['order_id']}", headers=ADMIN)
        assert response.status_code == 200

    def test_list_orders(self, client, list_product):
        _place_order(client, list_product)
        _place_order(client, list_product, headers=OTHER_BUYER)

        mine = client.get("/orders", headers=BUYER).json()
        assert mine["total"] == 1
        assert mine["total_pages"] == 1
        assert mine["page"] == 1
        assert mine["limit"] == 20

        everything = client.get("/orders", headers=ADMIN).json()
        assert everything["total"] == 2

        filtered = client.get("/orders", params={"user_id": "buyer-002"}, headers=ADMIN).json()
        assert filtered["total"] == 1
        assert filtered["orders"][0]["user_id"] == "buyer-002"

    def test_list_orders_rejects_bad_limit(self, client):
        response = client.get("/orders", params={"limit": 101}, headers=BUYER)
        assert response.status_code == 400
        assert "limit" in response.json()["messages"]


class TestOrderStatusEndpoint:
    def test_admin_advances_order(self, client, list_product):
        order = _place_order(client, list_product)

        response = _set_status(client, order["order_id"], "confirmed")

        assert response.status_code == 200
        assert response.json()["status"] == "confirmed"

    def test_invalid_transition_is_409(self, client, list_product):
        order = _place_order(client, list_product)

        response = _set_status(client, order["order_id"], "shipped")

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "invalid_transition"
        assert "status" in body["messages"]

    def test_buyer_is_forbidden(self, client, list_product):
        order = _place_order(client, list_product)
        response = _set_status(client, order["order_id"], "cancelled", headers=BUYER)
        assert response.status_code == 403

    def test_unknown_order(self, client):
        response = _set_status(client, "missing-order", "confirmed")
        assert response.status_code == 404


