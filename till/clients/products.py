# till/clients/products.py
import logging
from typing import Any, List, Optional

import httpx

from till.core.errors import CatalogLoadFailed, ProductSaveFailed
from till.domain.catalog.schemas import Product
from .base import call_service

logger = logging.getLogger(__name__)


async def get_products(client: httpx.AsyncClient, active_only: bool = True) -> List[Product]:
    params = {"isActive": "true"} if active_only else None
    envelope = await call_service(client, "GET", "/products", CatalogLoadFailed, params=params)
    try:
        return [Product.model_validate(item) for item in envelope.data or []]
    except ValueError as exc:
        raise CatalogLoadFailed() from exc


def _saved_product(data) -> Optional[Product]:
    if not data:
        return None
    try:
        return Product.model_validate(data)
    except ValueError:
        # the backend already stored it; the next catalog reload shows the record
        logger.warning("unreadable product record in save response", exc_info=True)
        return None


async def create_product(client: httpx.AsyncClient, payload: dict[str, Any]) -> Optional[Product]:
    envelope = await call_service(client, "POST", "/products", ProductSaveFailed, json=payload)
    return _saved_product(envelope.data)


async def update_product(
    client: httpx.AsyncClient,
    product_id: str,
    payload: dict[str, Any],
) -> Optional[Product]:
    envelope = await call_service(client, "PUT", f"/products/{product_id}", ProductSaveFailed, json=payload)
    return _saved_product(envelope.data)
