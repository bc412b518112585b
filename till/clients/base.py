# till/clients/base.py
import logging
from typing import Any, Optional, Type

import httpx
from pydantic import BaseModel

from till.core.config import settings
from till.core.errors import BusinessError

logger = logging.getLogger(__name__)


class ServiceResponse(BaseModel):
    """Envelope every backend endpoint answers with."""

    success: bool = False
    data: Any = None
    message: Optional[str] = None


def create_client(
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    headers = {"Content-Type": "application/json"}
    token = token if token is not None else settings.API_TOKEN
    if token:
        headers["Authorization"] = f"Bearer {token}"

    return httpx.AsyncClient(
        base_url=base_url or settings.API_BASE_URL,
        timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT,
        headers=headers,
        transport=transport,
    )


def _service_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


async def call_service(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    error: Type[BusinessError],
    **kwargs: Any,
) -> ServiceResponse:
    """Send one request and unwrap the ``{success, data, message}`` envelope.

    Transport errors, timeouts, error statuses and ``success: false`` all
    come out as ``error`` carrying the service's message when it sent one.
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.TimeoutException as exc:
        logger.warning("%s %s timed out", method, url)
        raise error() from exc
    except httpx.HTTPError as exc:
        logger.warning("%s %s failed: %s", method, url, exc)
        raise error() from exc

    if response.status_code == 401:
        logger.warning("%s %s rejected the session token", method, url)
    if response.is_error:
        logger.warning("%s %s returned %s", method, url, response.status_code)
        raise error(_service_message(response))

    try:
        envelope = ServiceResponse.model_validate(response.json())
    except ValueError as exc:
        logger.warning("%s %s returned a body that is not a service response", method, url)
        raise error() from exc

    if not envelope.success:
        raise error(envelope.message)
    return envelope
