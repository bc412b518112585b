# till/api/deps.py
import httpx
from fastapi import Request

from till.domain.catalog.service import CatalogView
from till.domain.checkout.service import CheckoutCoordinator


def get_catalog(request: Request) -> CatalogView:
    return request.app.state.catalog


def get_checkout(request: Request) -> CheckoutCoordinator:
    return request.app.state.checkout


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client
