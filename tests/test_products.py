from decimal import Decimal

import pytest

from till.core.errors import InvalidProductInput
from till.domain.products.schemas import ProductForm
from till.domain.products.service import build_product_payload, form_from_product


def valid_form(**overrides):
    fields = dict(name="  Rooibos Tea ", sku="bev-001", price="42.50", cost="30", stock="12")
    fields.update(overrides)
    return ProductForm(**fields)


def test_payload_is_normalised():
    payload = build_product_payload(valid_form(barcode=" 6001234 "))
    assert payload == {
        "name": "Rooibos Tea",
        "sku": "BEV-001",
        "barcode": "6001234",
        "category": "Other",
        "price": 42.5,
        "cost": 30.0,
        "stock": 12,
        "description": "",
        "lowStockThreshold": 10,
        "taxable": True,
        "taxRate": 15.0,
        "isActive": True,
    }


def test_blank_optional_fields_are_left_out():
    payload = build_product_payload(valid_form(barcode="   "))
    assert "barcode" not in payload
    assert "imageUrl" not in payload


@pytest.mark.parametrize(
    "overrides,field,message",
    [
        ({"name": "   "}, "name", "Please enter product name"),
        ({"sku": ""}, "sku", "Please enter SKU"),
        ({"category": "Toys"}, "category", "Please select a category"),
        ({"category": "snacks"}, "category", "Please select a category"),
        ({"price": "0"}, "price", "Please enter valid price"),
        ({"price": "abc"}, "price", "Please enter valid price"),
        ({"cost": "-1"}, "cost", "Please enter valid cost"),
        ({"stock": "-2"}, "stock", "Please enter valid stock quantity"),
        ({"stock": "1.5"}, "stock", "Please enter valid stock quantity"),
        ({"tax_rate": "fifteen"}, "tax_rate", "Please enter valid tax rate"),
    ],
)
def test_invalid_fields(overrides, field, message):
    with pytest.raises(InvalidProductInput) as excinfo:
        build_product_payload(valid_form(**overrides))
    assert excinfo.value.field == field
    assert excinfo.value.message == message


def test_first_invalid_field_wins():
    with pytest.raises(InvalidProductInput) as excinfo:
        build_product_payload(valid_form(name="", price=""))
    assert excinfo.value.field == "name"


def test_zero_stock_is_allowed():
    assert build_product_payload(valid_form(stock="0"))["stock"] == 0


def test_form_round_trips_existing_product(product_factory):
    product = product_factory(
        "p9",
        name="Rusks",
        sku="BAK-9",
        price=Decimal("55.99"),
        cost=Decimal("40"),
        stock=3,
        taxable=True,
        tax_rate=Decimal("15"),
        low_stock_threshold=4,
    )
    form = form_from_product(product)
    assert form.price == "55.99"
    assert form.category == "Snacks"
    assert form.low_stock_threshold == "4"
    assert form.barcode == ""
    assert build_product_payload(form)["price"] == 55.99


def test_unknown_category_opens_as_other(product_factory):
    form = form_from_product(product_factory("p10", category="Produce"))
    assert form.category == "Other"
    assert build_product_payload(form)["category"] == "Other"
