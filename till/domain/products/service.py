# till/domain/products/service.py
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from till.core.errors import InvalidProductInput
from till.domain.catalog.schemas import Product
from .schemas import PRODUCT_CATEGORIES, ProductForm


def _decimal(raw: str) -> Optional[Decimal]:
    try:
        value = Decimal(raw.strip())
    except (InvalidOperation, AttributeError):
        return None
    return value if value.is_finite() else None


def _integer(raw: str) -> Optional[int]:
    try:
        return int(raw.strip())
    except (ValueError, AttributeError):
        return None


def _editor_category(category: Optional[str]) -> str:
    # the editor only offers PRODUCT_CATEGORIES; anything else opens as "Other"
    wanted = (category or "").strip().lower()
    for choice in PRODUCT_CATEGORIES:
        if choice.lower() == wanted:
            return choice
    return "Other"


def form_from_product(product: Product) -> ProductForm:
    return ProductForm(
        name=product.name,
        sku=product.sku,
        barcode=product.barcode or "",
        category=_editor_category(product.category),
        price=str(product.price),
        cost=str(product.cost),
        stock=str(product.stock),
        description=product.description or "",
        image_url=product.image_url,
        low_stock_threshold=str(product.low_stock_threshold if product.low_stock_threshold is not None else 10),
        taxable=product.taxable,
        tax_rate=str(product.tax_rate),
    )


def build_product_payload(form: ProductForm) -> dict[str, Any]:
    """Validate the editor fields and build the catalog service body.

    Stops at the first invalid field, checked in the order the editor
    shows them.
    """
    name = form.name.strip()
    if not name:
        raise InvalidProductInput("name", "Please enter product name")

    sku = form.sku.strip()
    if not sku:
        raise InvalidProductInput("sku", "Please enter SKU")

    if form.category not in PRODUCT_CATEGORIES:
        raise InvalidProductInput("category", "Please select a category")

    price = _decimal(form.price)
    if price is None or price <= 0:
        raise InvalidProductInput("price", "Please enter valid price")

    cost = _decimal(form.cost)
    if cost is None or cost <= 0:
        raise InvalidProductInput("cost", "Please enter valid cost")

    stock = _integer(form.stock)
    if stock is None or stock < 0:
        raise InvalidProductInput("stock", "Please enter valid stock quantity")

    low_stock_threshold = _integer(form.low_stock_threshold)
    if low_stock_threshold is None or low_stock_threshold < 0:
        raise InvalidProductInput("low_stock_threshold", "Please enter valid low stock threshold")

    tax_rate = _decimal(form.tax_rate)
    if tax_rate is None or tax_rate < 0:
        raise InvalidProductInput("tax_rate", "Please enter valid tax rate")

    payload: dict[str, Any] = {
        "name": name,
        "sku": sku.upper(),
        "category": form.category,
        "price": float(price),
        "cost": float(cost),
        "stock": stock,
        "description": form.description.strip(),
        "lowStockThreshold": low_stock_threshold,
        "taxable": form.taxable,
        "taxRate": float(tax_rate),
        "isActive": True,
    }
    # optional fields are left out rather than sent empty
    if form.barcode.strip():
        payload["barcode"] = form.barcode.strip()
    if form.image_url:
        payload["imageUrl"] = form.image_url
    return payload
