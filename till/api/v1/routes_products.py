# till/api/v1/routes_products.py
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends

from till.api.deps import get_catalog, get_http_client
from till.clients.products import create_product, update_product
from till.core.errors import CatalogLoadFailed, ProductNotFound
from till.domain.catalog.schemas import Product
from till.domain.catalog.service import CatalogView, load_catalog
from till.domain.products.schemas import ProductForm
from till.domain.products.service import build_product_payload, form_from_product

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/products", tags=["products"])


async def _refresh(client: httpx.AsyncClient, catalog: CatalogView) -> None:
    try:
        await load_catalog(client, catalog)
    except CatalogLoadFailed as exc:
        # the product is saved either way
        logger.warning("catalog reload after product save failed: %s", exc.message)


@router.get("/{product_id}/form", response_model=ProductForm)
async def product_form_endpoint(product_id: str, catalog: CatalogView = Depends(get_catalog)):
    product = catalog.find(product_id)
    if product is None:
        raise ProductNotFound()
    return form_from_product(product)


@router.post("", response_model=Optional[Product])
async def create_product_endpoint(
    form: ProductForm,
    catalog: CatalogView = Depends(get_catalog),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    product = await create_product(client, build_product_payload(form))
    await _refresh(client, catalog)
    return product


@router.put("/{product_id}", response_model=Optional[Product])
async def update_product_endpoint(
    product_id: str,
    form: ProductForm,
    catalog: CatalogView = Depends(get_catalog),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    product = await update_product(client, product_id, build_product_payload(form))
    await _refresh(client, catalog)
    return product
