# till/domain/products/schemas.py
from typing import Optional

from pydantic import BaseModel

PRODUCT_CATEGORIES = ("Beverages", "Food", "Snacks", "Dairy", "Bakery", "Household", "Other")


class ProductForm(BaseModel):
    """Product details as typed into the product editor.

    Every field is kept as raw text so half-typed values survive until the
    operator saves.
    """

    name: str = ""
    sku: str = ""
    barcode: str = ""
    category: str = "Other"
    price: str = ""
    cost: str = ""
    stock: str = ""
    description: str = ""
    image_url: Optional[str] = None
    low_stock_threshold: str = "10"
    taxable: bool = True
    tax_rate: str = "15"
