from decimal import Decimal

import httpx
import pytest
from fastapi.testclient import TestClient

from till.clients.base import create_client
from till.core.errors import SubmissionFailed
from till.domain.catalog.service import CatalogView
from till.domain.checkout.service import CheckoutCoordinator
from till.main import create_app


class FakeSubmitter:
    def __init__(self):
        self.calls = []
        self.error = None

    async def __call__(self, payload):
        self.calls.append(payload)
        if self.error is not None:
            raise self.error
        return {"_id": "txn-42"}


@pytest.fixture
def submitter():
    return FakeSubmitter()


@pytest.fixture
def backend_requests():
    return []


@pytest.fixture
def client(catalog_products, product_factory, submitter, backend_requests):
    products = catalog_products + [
        product_factory("juice", name="Orange Juice", sku="BEV-777", price=Decimal("10"), taxable=True, tax_rate=Decimal("15"), stock=2, category="beverages"),
        product_factory("gone", name="Sold Out Item", stock=0),
    ]

    def backend(request):
        backend_requests.append(request)
        if request.url.path == "/api/transactions":
            return httpx.Response(200, json={"success": True, "data": [{"_id": "txn-1"}]})
        return httpx.Response(200, json={"success": True, "data": []})

    http = create_client(base_url="http://backend.test/api", transport=httpx.MockTransport(backend))
    app = create_app(
        catalog=CatalogView(products, page_size=3),
        checkout=CheckoutCoordinator(submitter),
        client=http,
    )
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_catalog_browsing(client):
    page = client.get("/api/v1/catalog").json()
    assert page["total_pages"] == 3
    assert [p["_id"] for p in page["items"]] == ["apple", "milk", "bread"]

    page = client.put("/api/v1/catalog/page", json={"page": 2}).json()
    assert page["page"] == 2

    page = client.put("/api/v1/catalog/category", json={"category": "Beverages"}).json()
    assert page["page"] == 1
    assert [p["_id"] for p in page["items"]] == ["cola", "juice"]

    page = client.put("/api/v1/catalog/search", json={"query": "orange"}).json()
    assert [p["_id"] for p in page["items"]] == ["juice"]


def test_categories(client):
    categories = client.get("/api/v1/catalog/categories").json()
    assert categories[0] == {"id": "all", "name": "All Products"}


def test_cart_flow_and_checkout(client, submitter):
    client.post("/api/v1/cart/items", json={"product_id": "juice"})
    client.post("/api/v1/cart/items", json={"product_id": "juice"})
    session = client.post("/api/v1/cart/items", json={"product_id": "apple"}).json()
    assert session["item_count"] == 3
    assert session["display"]["subtotal"] == "R30.00"
    assert session["display"]["tax"] == "R3.00"

    session = client.put("/api/v1/cart/discount", json={"amount": "10", "kind": "percentage"}).json()
    assert session["display"]["total"] == "R30.00"

    session = client.post("/api/v1/checkout/payment").json()
    assert session["state"] == "awaiting_payment"

    session = client.put("/api/v1/checkout/tender", json={"amount": "50", "method": "card"}).json()
    assert session["display"]["change"] == "R20.00"

    receipt = client.post("/api/v1/checkout").json()
    assert receipt["transaction"] == {"_id": "txn-42"}
    assert receipt["change_display"] == "R20.00"
    assert receipt["payload"]["paymentMethod"] == "card"
    assert len(submitter.calls) == 1

    session = client.get("/api/v1/cart").json()
    assert session["state"] == "idle"
    assert session["lines"] == []


def test_stock_errors(client):
    response = client.post("/api/v1/cart/items", json={"product_id": "gone"})
    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "Product out of stock", "code": "OutOfStock"}

    client.post("/api/v1/cart/items", json={"product_id": "juice"})
    client.post("/api/v1/cart/items", json={"product_id": "juice"})
    response = client.post("/api/v1/cart/items", json={"product_id": "juice"})
    assert response.status_code == 409
    assert response.json()["message"] == "Only 2 items available"
    assert client.get("/api/v1/cart").json()["item_count"] == 2


def test_unknown_product(client):
    response = client.post("/api/v1/cart/items", json={"product_id": "nope"})
    assert response.status_code == 404
    assert response.json()["code"] == "ProductNotFound"


def test_quantity_and_removal(client):
    client.post("/api/v1/cart/items", json={"product_id": "apple"})
    session = client.put("/api/v1/cart/items/apple", json={"quantity": 4}).json()
    assert session["lines"][0]["quantity"] == 4

    session = client.put("/api/v1/cart/items/apple", json={"quantity": 0}).json()
    assert session["lines"] == []

    client.post("/api/v1/cart/items", json={"product_id": "milk"})
    session = client.delete("/api/v1/cart/items/milk").json()
    assert session["lines"] == []


def test_empty_cart_checkout(client, submitter):
    response = client.post("/api/v1/checkout/payment")
    assert response.status_code == 422
    assert response.json()["code"] == "EmptyCart"

    response = client.post("/api/v1/checkout")
    assert response.status_code == 422
    assert submitter.calls == []


def test_insufficient_payment(client, submitter):
    client.post("/api/v1/cart/items", json={"product_id": "apple"})
    client.put("/api/v1/checkout/tender", json={"amount": "9.99"})
    response = client.post("/api/v1/checkout")
    assert response.status_code == 422
    assert response.json()["message"] == "Amount paid is less than total"
    assert submitter.calls == []


def test_failed_submission_is_retryable(client, submitter):
    submitter.error = SubmissionFailed("Backend unavailable")
    client.post("/api/v1/cart/items", json={"product_id": "apple"})
    client.put("/api/v1/cart/comment", json={"comment": "gift"})
    client.post("/api/v1/checkout/payment")
    client.put("/api/v1/checkout/tender", json={"amount": "10"})

    response = client.post("/api/v1/checkout")
    assert response.status_code == 502
    assert response.json()["message"] == "Backend unavailable"

    session = client.get("/api/v1/cart").json()
    assert session["state"] == "awaiting_payment"
    assert session["comment"] == "gift"
    assert session["last_error"] == "Backend unavailable"
    assert len(session["lines"]) == 1


def test_clear_cart(client):
    client.post("/api/v1/cart/items", json={"product_id": "apple"})
    client.put("/api/v1/cart/discount", json={"amount": "2"})
    session = client.delete("/api/v1/cart").json()
    assert session["lines"] == []
    assert session["discount"]["amount"] == 0


def test_transaction_history(client, backend_requests):
    assert client.get("/api/v1/transactions", params={"period": "today"}).json() == [{"_id": "txn-1"}]
    assert "startDate" in backend_requests[-1].url.params
    assert client.get("/api/v1/transactions", params={"period": "decade"}).status_code == 422


def test_product_validation_error(client, backend_requests):
    response = client.post("/api/v1/products", json={"name": "Tea", "sku": "", "price": "5", "cost": "3", "stock": "1"})
    assert response.status_code == 422
    assert response.json()["field"] == "sku"
    assert backend_requests == []


def test_product_form_for_existing_product(client):
    form = client.get("/api/v1/products/apple/form").json()
    assert form["name"] == "Green Apple"
    assert form["price"] == "10"
