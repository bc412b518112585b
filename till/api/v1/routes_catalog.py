# till/api/v1/routes_catalog.py
import httpx
from fastapi import APIRouter, Depends

from till.api.deps import get_catalog, get_http_client
from till.domain.catalog.schemas import CatalogPage, Category, CategoryIn, PageIn, SearchIn
from till.domain.catalog.service import CATEGORIES, CatalogView, load_catalog


router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


@router.get("", response_model=CatalogPage)
async def current_page_endpoint(catalog: CatalogView = Depends(get_catalog)):
    return catalog.current_page()


@router.get("/categories", response_model=list[Category])
async def categories_endpoint():
    return list(CATEGORIES)


@router.put("/category", response_model=CatalogPage)
async def select_category_endpoint(payload: CategoryIn, catalog: CatalogView = Depends(get_catalog)):
    catalog.select_category(payload.category)
    return catalog.current_page()


@router.put("/search", response_model=CatalogPage)
async def search_endpoint(payload: SearchIn, catalog: CatalogView = Depends(get_catalog)):
    catalog.search(payload.query)
    return catalog.current_page()


@router.put("/page", response_model=CatalogPage)
async def page_endpoint(payload: PageIn, catalog: CatalogView = Depends(get_catalog)):
    catalog.go_to_page(payload.page)
    return catalog.current_page()


@router.post("/reload", response_model=CatalogPage)
async def reload_endpoint(
    catalog: CatalogView = Depends(get_catalog),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    await load_catalog(client, catalog)
    return catalog.current_page()
