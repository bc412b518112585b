# till/domain/catalog/schemas.py
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from till.core.money import Money


class Product(BaseModel):
    """A sellable product as the catalog service reports it.

    The till never edits a product in place; stock and prices change on the
    backend and reach the till on the next catalog load.
    """

    id: str = Field(alias="_id")
    name: str
    sku: str
    barcode: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None

    price: Money = Field(ge=0)
    cost: Money = Decimal("0")
    stock: int = Field(default=0, ge=0)
    low_stock_threshold: Optional[int] = None

    taxable: bool = False
    tax_rate: Money = Decimal("0")  # percent, only read when taxable

    image_url: Optional[str] = None
    is_active: bool = True

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class Category(BaseModel):
    id: str
    name: str

    class Config:
        frozen = True


class CatalogPage(BaseModel):
    items: list[Product]
    page: int
    total_pages: int
    total_items: int
    category: str
    query: str


class CategoryIn(BaseModel):
    category: str


class SearchIn(BaseModel):
    query: str = ""


class PageIn(BaseModel):
    page: int
