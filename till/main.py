# till/main.py
import logging
from contextlib import AsyncExitStack, asynccontextmanager
from functools import partial
from typing import Optional

import httpx
from fastapi import FastAPI

from till.api.errors import business_error_handler
from till.api.v1.routes_cart import router as cart_router
from till.api.v1.routes_catalog import router as catalog_router
from till.api.v1.routes_checkout import router as checkout_router
from till.api.v1.routes_products import router as products_router
from till.api.v1.routes_transactions import router as transactions_router
from till.clients.base import create_client
from till.clients.transactions import create_transaction
from till.core.config import settings
from till.core.errors import BusinessError, CatalogLoadFailed
from till.core.logging import configure_logging
from till.domain.catalog.service import CatalogView, load_catalog
from till.domain.checkout.schemas import Cashier
from till.domain.checkout.service import CheckoutCoordinator

logger = logging.getLogger(__name__)


def create_app(
    catalog: Optional[CatalogView] = None,
    checkout: Optional[CheckoutCoordinator] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Build the till API.

    Anything passed in is used as-is; whatever is missing is built from
    settings when the app starts, including one shared backend client.
    """
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with AsyncExitStack() as stack:
            http = client if client is not None else await stack.enter_async_context(create_client())
            view = catalog if catalog is not None else CatalogView()

            app.state.http_client = http
            app.state.catalog = view
            app.state.checkout = checkout if checkout is not None else CheckoutCoordinator(
                submit=partial(create_transaction, http),
                cashier=Cashier(id=settings.CASHIER_ID, name=settings.CASHIER_NAME),
                reload_catalog=partial(load_catalog, http, view),
            )

            if catalog is None:
                try:
                    await load_catalog(http, view)
                except CatalogLoadFailed as exc:
                    # the till still starts; the operator can reload later
                    logger.warning("initial catalog load failed: %s", exc.message)
            yield

    app = FastAPI(title="till", lifespan=lifespan)
    app.add_exception_handler(BusinessError, business_error_handler)

    app.include_router(catalog_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(transactions_router)
    app.include_router(products_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
