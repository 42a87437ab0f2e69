import pytest
from app import app
from fastapi.testclient import TestClient

ADMIN = {"X-User-Id": "admin-001", "X-User-Role": "admin"}


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def list_product(client):
    """Helper: POST /products as admin and return the product_id.

    Products start as drafts; ``publish=True`` makes them visible to buyers.
    """

    def _list(name="Espresso Machine", price=3000, stock=5, image_url=None, description=None, publish=False):
        response = client.post(
            "/products",
            json={
                "name": name,
                "price": price,
                "stock": stock,
                "image_url": image_url,
                "description": description,
            },
            headers=ADMIN,
        )
        assert response.status_code == 201
        product_id = response.json()["product_id"]
        if publish:
            response = client.patch(f"/products/{product_id}/status", json={"status": "published"}, headers=ADMIN)
            assert response.status_code == 200
        return product_id

    return _list
