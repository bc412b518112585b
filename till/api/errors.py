# till/api/errors.py
from fastapi import Request
from fastapi.responses import JSONResponse

from till.core.errors import (
    BusinessError,
    CatalogLoadFailed,
    CheckoutInProgress,
    EmptyCart,
    HistoryLoadFailed,
    InsufficientPayment,
    InvalidProductInput,
    OutOfStock,
    ProductNotFound,
    ProductSaveFailed,
    StockExceeded,
    SubmissionFailed,
)

STATUS_CODES = {
    OutOfStock: 409,
    StockExceeded: 409,
    CheckoutInProgress: 409,
    EmptyCart: 422,
    InsufficientPayment: 422,
    InvalidProductInput: 422,
    ProductNotFound: 404,
    SubmissionFailed: 502,
    CatalogLoadFailed: 502,
    ProductSaveFailed: 502,
    HistoryLoadFailed: 502,
}


async def business_error_handler(request: Request, exc: BusinessError) -> JSONResponse:
    body = {"success": False, "message": exc.message, "code": type(exc).__name__}
    if isinstance(exc, InvalidProductInput):
        body["field"] = exc.field
    return JSONResponse(status_code=STATUS_CODES.get(type(exc), 400), content=body)
