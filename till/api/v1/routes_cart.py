# till/api/v1/routes_cart.py
from fastapi import APIRouter, Depends

from till.api.deps import get_catalog, get_checkout
from till.core.errors import ProductNotFound
from till.domain.cart.schemas import AddItem, SetQuantity
from till.domain.catalog.service import CatalogView
from till.domain.checkout.schemas import CommentIn, SessionOut
from till.domain.checkout.service import CheckoutCoordinator, session_snapshot
from till.domain.pricing.schemas import DiscountSpec


router = APIRouter(prefix="/api/v1/cart", tags=["cart"])


@router.get("", response_model=SessionOut)
async def get_cart_endpoint(checkout: CheckoutCoordinator = Depends(get_checkout)):
    return session_snapshot(checkout)


@router.post("/items", response_model=SessionOut)
async def add_item_endpoint(
    payload: AddItem,
    catalog: CatalogView = Depends(get_catalog),
    checkout: CheckoutCoordinator = Depends(get_checkout),
):
    product = catalog.find(payload.product_id)
    if product is None:
        raise ProductNotFound()
    checkout.add_item(product)
    return session_snapshot(checkout)


@router.put("/items/{product_id}", response_model=SessionOut)
async def set_quantity_endpoint(
    product_id: str,
    payload: SetQuantity,
    checkout: CheckoutCoordinator = Depends(get_checkout),
):
    checkout.set_quantity(product_id, payload.quantity)
    return session_snapshot(checkout)


@router.delete("/items/{product_id}", response_model=SessionOut)
async def remove_item_endpoint(product_id: str, checkout: CheckoutCoordinator = Depends(get_checkout)):
    checkout.remove_item(product_id)
    return session_snapshot(checkout)


@router.delete("", response_model=SessionOut)
async def clear_cart_endpoint(checkout: CheckoutCoordinator = Depends(get_checkout)):
    checkout.clear()
    return session_snapshot(checkout)


@router.put("/discount", response_model=SessionOut)
async def discount_endpoint(payload: DiscountSpec, checkout: CheckoutCoordinator = Depends(get_checkout)):
    checkout.set_discount(payload.amount, payload.kind)
    return session_snapshot(checkout)


@router.put("/comment", response_model=SessionOut)
async def comment_endpoint(payload: CommentIn, checkout: CheckoutCoordinator = Depends(get_checkout)):
    checkout.set_comment(payload.comment)
    return session_snapshot(checkout)
