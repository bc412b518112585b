# till/api/v1/routes_transactions.py
from typing import Any, Literal

import httpx
from fastapi import APIRouter, Depends, Query

from till.api.deps import get_http_client
from till.clients.transactions import get_transactions


router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])


@router.get("", response_model=list[dict[str, Any]])
async def list_transactions_endpoint(
    period: Literal["all", "today", "week", "month"] = Query("all"),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await get_transactions(client, period)
