# universe_rag/http.py
"""
HTTP plumbing for the Universe server API.

Usage:
    from universe_rag.http import create_async_api_client, fetch_api

    async with create_async_api_client(base_url, api_key=token) as client:
        data = await fetch_api(client, "/emit", "POST", body=payload)

Response handling:
    - 2xx: parsed JSON body (None for an empty body, text if not JSON)
    - anything else: ApiError with the body's "error" or "description"
      field, or the HTTP reason phrase
    - connection-level failure: one retry after `retry_delay` seconds,
      then TransportError
    - undecodable response or redirect loop: TransportError, not retried
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx

from universe_rag.exceptions import ApiError, TransportError
from universe_rag.logging.logger import get_logger
from universe_rag.logging.tags import HTTP

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0

DEFAULT_RETRY_DELAY = 1.0

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


# =============================================================================
# Client Factory
# =============================================================================


def create_async_api_client(
    base_url: str,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """
    Create an async HTTP client for the Universe API.

    Args:
        base_url: Server base URL (e.g., "https://store.example")
        api_key: Bearer token (optional)
        timeout: Request timeout in seconds
        **kwargs: Additional arguments passed to httpx.AsyncClient (e.g. transport)

    Usage:
        async with create_async_api_client(...) as client:
            response = await client.post("/emit", json=payload)
    """
    final_headers = dict(DEFAULT_HEADERS)

    if api_key:
        final_headers["Authorization"] = f"Bearer {api_key}"

    return httpx.AsyncClient(
        base_url=base_url,
        headers=final_headers,
        timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
        follow_redirects=True,
        **kwargs,
    )


# =============================================================================
# Response Handling
# =============================================================================


def handle_response(response: httpx.Response, endpoint: str = "") -> Any:
    """
    Convert a response into its payload, or raise ApiError.

    Raises:
        ApiError: If the status is not 2xx
    """
    if response.is_success:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    message = response.reason_phrase
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        if data.get("error"):
            message = str(data["error"])
        elif data.get("description"):
            message = str(data["description"])

    raise ApiError(response.status_code, message, endpoint=endpoint)


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


async def _send(
    client: httpx.AsyncClient,
    method: str,
    endpoint: str,
    body: Any,
) -> httpx.Response:
    logger.debug(f"{HTTP} {method} {endpoint}")
    try:
        if body is None:
            return await client.request(method, endpoint)
        return await client.request(method, endpoint, json=body)
    except httpx.TransportError:
        raise
    except httpx.RequestError as e:
        # A response arrived but could not be used (bad encoding, redirect loop).
        raise TransportError(_describe(e), endpoint=endpoint, retried=False) from e


async def fetch_api(
    client: httpx.AsyncClient,
    endpoint: str,
    method: str,
    body: Any = None,
    retry_delay: float = DEFAULT_RETRY_DELAY,
) -> Any:
    """
    Issue one API request, retrying once on a transport failure.

    HTTP error statuses are never retried.

    Raises:
        ApiError: If the server answers with a non-success status
        TransportError: If both attempts fail to get a response, or the
            response cannot be decoded
    """
    try:
        response = await _send(client, method, endpoint, body)
    except httpx.TransportError as e:
        logger.warning(f"{HTTP} {method} {endpoint} failed ({e!r}), retrying in {retry_delay}s")
        await asyncio.sleep(retry_delay)
        try:
            response = await _send(client, method, endpoint, body)
        except httpx.TransportError as retry_error:
            raise TransportError(
                _describe(retry_error),
                endpoint=endpoint,
            ) from retry_error

    return handle_response(response, endpoint=endpoint)
