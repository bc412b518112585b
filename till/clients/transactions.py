# till/clients/transactions.py
import calendar
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

import httpx

from till.core.errors import HistoryLoadFailed, SubmissionFailed
from till.domain.checkout.schemas import TransactionPayload
from .base import call_service

HISTORY_PERIODS = ("all", "today", "week", "month")


def _one_month_back(moment: datetime) -> datetime:
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def history_params(period: str = "all", now: Optional[datetime] = None) -> dict[str, str]:
    """Date range query for the transaction history filter."""
    if period not in HISTORY_PERIODS:
        raise ValueError(f"unknown history period: {period}")
    if period == "all":
        return {}

    now = now or datetime.now(timezone.utc)
    if period == "today":
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = now.replace(hour=23, minute=59, second=59, microsecond=999000)
    elif period == "week":
        start, end = now - timedelta(days=7), now
    else:
        start, end = _one_month_back(now), now

    return {"startDate": start.isoformat(), "endDate": end.isoformat()}


async def create_transaction(client: httpx.AsyncClient, payload: TransactionPayload) -> Optional[dict]:
    envelope = await call_service(client, "POST", "/transactions", SubmissionFailed, json=payload.to_request())
    return envelope.data


async def get_transactions(
    client: httpx.AsyncClient,
    period: str = "all",
    now: Optional[datetime] = None,
) -> List[dict[str, Any]]:
    params = history_params(period, now)
    envelope = await call_service(client, "GET", "/transactions", HistoryLoadFailed, params=params or None)
    return list(envelope.data or [])
