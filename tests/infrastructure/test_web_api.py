"""Tests for the HTTP façade."""

import pytest
from fastapi.testclient import TestClient

from pos.infrastructure.web.fastapi_app import create_app


@pytest.fixture
def client(seeded) -> TestClient:
    return TestClient(create_app(seeded.uow_factory))


@pytest.fixture
def empty_client(container) -> TestClient:
    return TestClient(create_app(container.uow_factory))


class TestHealth:

    def test_health(self, empty_client):
        body = empty_client.get("/health").json()
        assert body["status"] == "ok"
        assert "timestamp" in body


class TestProducts:

    def test_create_product(self, empty_client):
        resp = empty_client.post(
            "/rpc/createProduct",
            json={"scan_code": "QR-9", "name": "Tea", "price": "2.50"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] == 1
        assert body["price"] == 2.5

    def test_create_product_accepts_qr_code_alias(self, empty_client):
        resp = empty_client.post(
            "/rpc/createProduct",
            json={"qr_code": "QR-1", "name": "Tea", "price": "2.50"},
        )
        assert resp.json()["scan_code"] == "QR-1"

    def test_duplicate_scan_code_is_conflict(self, client):
        resp = client.post(
            "/rpc/createProduct",
            json={"scan_code": "TEST001", "name": "Again", "price": "1.00"},
        )
        assert resp.status_code == 409
        assert "TEST001" in resp.json()["message"]

    def test_invalid_price_rejected(self, empty_client):
        resp = empty_client.post(
            "/rpc/createProduct",
            json={"scan_code": "X", "name": "Thing", "price": "-1"},
        )
        assert resp.status_code == 400
        assert resp.json()["type"] == "RequestValidationError"

    def test_get_products_empty(self, empty_client):
        assert empty_client.get("/rpc/getProducts").json() == []

    def test_lookup_by_scan_code(self, client):
        body = client.get("/rpc/getProductByScanCode", params={"scan_code": "TEST002"}).json()
        assert body["name"] == "Test Product 2"
        assert body["price"] == 29.95

    def test_lookup_miss_is_null(self, client):
        resp = client.get("/rpc/getProductByScanCode", params={"scan_code": "test002"})
        assert resp.status_code == 200
        assert resp.json() is None

    def test_get_product_by_id(self, client):
        assert client.get("/rpc/getProductById", params={"id": 1}).json()["scan_code"] == "TEST001"
        assert client.get("/rpc/getProductById", params={"id": 99}).json() is None

    def test_update_product_partial(self, client):
        resp = client.post("/rpc/updateProduct", json={"id": 1, "price": "21.50"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["price"] == 21.5
        assert body["name"] == "Test Product 1"

    def test_update_product_explicit_null_rejected(self, client):
        resp = client.post("/rpc/updateProduct", json={"id": 1, "name": None})
        assert resp.status_code == 400

    def test_update_missing_product(self, client):
        resp = client.post("/rpc/updateProduct", json={"id": 99, "name": "x"})
        assert resp.status_code == 404

    def test_update_to_taken_scan_code(self, client):
        resp = client.post("/rpc/updateProduct", json={"id": 1, "scan_code": "TEST002"})
        assert resp.status_code == 409


class TestOrders:

    def test_create_order(self, client):
        resp = client.post(
            "/rpc/createOrder",
            json={
                "items": [{"product_id": 1, "quantity": 2}, {"product_id": 2, "quantity": 1}],
                "payment_method": "card",
            },
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["total_amount"] == 69.93
        assert body["status"] == "pending"
        assert body["payment_method"] == "card"

    def test_create_order_accepts_payment_type_alias(self, client):
        resp = client.post(
            "/rpc/createOrder",
            json={"items": [{"product_id": 1, "quantity": 1}], "payment_type": "cash"},
        )
        assert resp.json()["payment_method"] == "cash"

    def test_missing_products_named(self, client):
        resp = client.post(
            "/rpc/createOrder",
            json={
                "items": [{"product_id": 1, "quantity": 1}, {"product_id": 999, "quantity": 1}],
                "payment_method": "card",
            },
        )
        assert resp.status_code == 404
        assert "999" in resp.json()["message"]
        assert client.get("/rpc/getOrders").json() == []

    @pytest.mark.parametrize(
        "payload",
        [
            {"items": [], "payment_method": "cash"},
            {"items": [{"product_id": 1, "quantity": 0}], "payment_method": "cash"},
            {"items": [{"product_id": 1, "quantity": 1}], "payment_method": "cheque"},
        ],
    )
    def test_invalid_order_input(self, client, payload):
        resp = client.post("/rpc/createOrder", json=payload)
        assert resp.status_code == 400

    def test_oversized_quantity_is_validation_error(self, client):
        resp = client.post(
            "/rpc/createOrder",
            json={"items": [{"product_id": 1, "quantity": 10**18}], "payment_method": "card"},
        )
        assert resp.status_code == 400
        assert resp.json()["type"] == "RequestValidationError"
        assert client.get("/rpc/getOrders").json() == []

    def test_get_order_by_id(self, client):
        created = client.post(
            "/rpc/createOrder",
            json={"items": [{"product_id": 2, "quantity": 3}], "payment_method": "cash"},
        ).json()

        body = client.get("/rpc/getOrderById", params={"id": created["id"]}).json()

        assert body["total_amount"] == 89.85
        [item] = body["items"]
        assert item["subtotal"] == 89.85
        assert item["product"] == {"id": 2, "name": "Test Product 2", "scan_code": "TEST002"}

    def test_get_order_by_id_miss_is_null(self, client):
        resp = client.get("/rpc/getOrderById", params={"id": 123})
        assert resp.status_code == 200
        assert resp.json() is None

    def test_update_order_status(self, client):
        created = client.post(
            "/rpc/createOrder",
            json={"items": [{"product_id": 1, "quantity": 1}], "payment_method": "cash"},
        ).json()

        resp = client.post(
            "/rpc/updateOrderStatus", json={"id": created["id"], "status": "completed"}
        )

        body = resp.json()
        assert body["status"] == "completed"
        assert body["total_amount"] == created["total_amount"]
        assert body["created_at"] == created["created_at"]

    def test_update_status_of_missing_order(self, client):
        resp = client.post("/rpc/updateOrderStatus", json={"id": 77, "status": "completed"})
        assert resp.status_code == 404
        assert "77" in resp.json()["message"]

    def test_strict_transitions(self, seeded):
        client = TestClient(create_app(seeded.uow_factory, strict_status_transitions=True))
        created = client.post(
            "/rpc/createOrder",
            json={"items": [{"product_id": 1, "quantity": 1}], "payment_method": "cash"},
        ).json()
        client.post("/rpc/updateOrderStatus", json={"id": created["id"], "status": "completed"})

        resp = client.post(
            "/rpc/updateOrderStatus", json={"id": created["id"], "status": "cancelled"}
        )

        assert resp.status_code == 400
        assert resp.json()["type"] == "InvalidStatusTransitionError"
