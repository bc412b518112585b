from decimal import Decimal

import pytest

from till.domain.catalog.schemas import Product


def make_product(product_id="p1", **overrides) -> Product:
    fields = {
        "id": product_id,
        "name": f"Product {product_id}",
        "sku": f"SKU-{product_id}".upper(),
        "category": "snacks",
        "price": Decimal("10"),
        "cost": Decimal("6"),
        "stock": 5,
        "taxable": False,
        "tax_rate": Decimal("0"),
    }
    fields.update(overrides)
    return Product(**fields)


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def catalog_products():
    return [
        make_product("apple", name="Green Apple", sku="fru-001", barcode="600100", category="Produce"),
        make_product("milk", name="Full Cream Milk", sku="DAI-010", barcode="600200", category="dairy"),
        make_product("bread", name="White Bread", sku="BAK-002", barcode="ABC777", category="Bakery"),
        make_product("chips", name="Salted Chips", sku="SNK-100", category="snacks"),
        make_product("cola", name="Cola 2L", sku="BEV-020", barcode="600300", category="beverages"),
    ]
