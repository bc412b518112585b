# till/api/v1/routes_checkout.py
from fastapi import APIRouter, Depends

from till.api.deps import get_checkout
from till.domain.checkout.schemas import CheckoutReceipt, SessionOut
from till.domain.checkout.service import CheckoutCoordinator, session_snapshot
from till.domain.payment.schemas import TenderIn


router = APIRouter(prefix="/api/v1/checkout", tags=["checkout"])


@router.post("/payment", response_model=SessionOut)
async def open_payment_endpoint(checkout: CheckoutCoordinator = Depends(get_checkout)):
    checkout.open_payment()
    return session_snapshot(checkout)


@router.delete("/payment", response_model=SessionOut)
async def close_payment_endpoint(checkout: CheckoutCoordinator = Depends(get_checkout)):
    checkout.close_payment()
    return session_snapshot(checkout)


@router.put("/tender", response_model=SessionOut)
async def tender_endpoint(payload: TenderIn, checkout: CheckoutCoordinator = Depends(get_checkout)):
    checkout.set_tender(payload.amount, payload.method)
    return session_snapshot(checkout)


@router.post("", response_model=CheckoutReceipt)
async def checkout_endpoint(checkout: CheckoutCoordinator = Depends(get_checkout)):
    # failures come back through the business error handler; the sale stays open
    return await checkout.checkout()
