# till/domain/catalog/service.py
import logging
import math
from typing import Iterable, Optional, Sequence, TypeVar

import httpx

from till.clients.products import get_products
from till.core.config import settings
from .schemas import CatalogPage, Category, Product

ALL = "all"

CATEGORIES: tuple[Category, ...] = (
    Category(id=ALL, name="All Products"),
    Category(id="produce", name="Produce"),
    Category(id="dairy", name="Dairy"),
    Category(id="bakery", name="Bakery"),
    Category(id="meat", name="Meat & Seafood"),
    Category(id="snacks", name="Snacks"),
    Category(id="beverages", name="Beverages"),
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _matches_query(product: Product, query: str) -> bool:
    needle = query.lower()
    if needle in product.name.lower():
        return True
    if product.sku and needle in product.sku.lower():
        return True
    # barcodes are compared verbatim
    return bool(product.barcode) and query in product.barcode


def filter_products(
    products: Iterable[Product],
    category: str = ALL,
    query: str = "",
) -> list[Product]:
    filtered = list(products)

    if category.lower() != ALL:
        wanted = category.lower()
        filtered = [p for p in filtered if (p.category or "").lower() == wanted]

    if query.strip():
        filtered = [p for p in filtered if _matches_query(p, query)]

    return filtered


def paginate(items: Sequence[T], page_size: int, page: int) -> tuple[list[T], int]:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    if page < 1:
        raise ValueError("page numbers start at 1")

    total_pages = math.ceil(len(items) / page_size)
    start = (page - 1) * page_size
    return list(items[start:start + page_size]), total_pages


class CatalogView:
    """What one till is currently looking at in the catalog.

    Changing the category or the search text always jumps back to the first
    page; the page list itself is recomputed on every read.
    """

    def __init__(self, products: Iterable[Product] = (), page_size: Optional[int] = None):
        self.products: tuple[Product, ...] = tuple(products)
        self.page_size = page_size or settings.PAGE_SIZE
        self.category = ALL
        self.query = ""
        self.page = 1

    def replace_products(self, products: Iterable[Product]) -> None:
        self.products = tuple(products)
        self.page = 1

    def select_category(self, category: str) -> None:
        self.category = category
        self.page = 1

    def search(self, query: str) -> None:
        self.query = query
        self.page = 1

    def visible(self) -> list[Product]:
        return filter_products(self.products, self.category, self.query)

    def go_to_page(self, page: int) -> int:
        _, total_pages = paginate(self.visible(), self.page_size, 1)
        self.page = min(max(page, 1), max(total_pages, 1))
        return self.page

    def current_page(self) -> CatalogPage:
        visible = self.visible()
        items, total_pages = paginate(visible, self.page_size, self.page)
        return CatalogPage(
            items=items,
            page=self.page,
            total_pages=total_pages,
            total_items=len(visible),
            category=self.category,
            query=self.query,
        )

    def find(self, product_id: str) -> Optional[Product]:
        for product in self.products:
            if product.id == product_id:
                return product
        return None


async def load_catalog(client: httpx.AsyncClient, view: CatalogView) -> CatalogView:
    products = await get_products(client, active_only=True)
    view.replace_products(products)
    logger.info("catalog loaded: %d products", len(products))
    return view
