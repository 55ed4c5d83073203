import logging
from typing import Any, Dict, Optional

import httpx

from barcode_proxy.adapters.interfaces.connector import APIConnector, HttpMethod
from barcode_proxy.core.exceptions import ProviderError

logger = logging.getLogger(__name__)


class HttpxConnector(APIConnector):
    """
    APIConnector backed by a shared ``httpx.AsyncClient``.

    One connector is created per application and shared by every provider
    client, so connections are pooled across lookups. Transport failures are
    translated into ``ProviderError``; HTTP error statuses are returned to the
    caller untouched because each provider interprets them differently.
    """

    def __init__(self, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the connector.

        Args:
            timeout: Per-request timeout in seconds
            client: Optional preconfigured client, mainly for tests
        """
        self.timeout = timeout
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(timeout=timeout)

    async def request(
        self,
        method: HttpMethod,
        url: str,
        source: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        logger.debug(f"{source}: {method.value} {url}")
        try:
            response = await self.http_client.request(
                method.value,
                url,
                params=params,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise ProviderError(
                source,
                f"Request timed out: {str(e) or type(e).__name__}",
                original_exception=e
            )
        except httpx.RequestError as e:
            raise ProviderError(
                source,
                f"Request failed: {str(e) or type(e).__name__}",
                original_exception=e
            )

        logger.debug(f"{source}: received status {response.status_code}")
        return response

    async def close(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()


def json_or_none(response: httpx.Response) -> Optional[Any]:
    """Decoded JSON body, or None when the body is not JSON."""
    try:
        return response.json()
    except ValueError:
        return None


# Upstream error bodies end up in client-visible messages
MAX_ERROR_BODY_CHARS = 500


def error_body(response: httpx.Response, limit: int = MAX_ERROR_BODY_CHARS) -> str:
    """Response text for an error message, whitespace-trimmed and cut to ``limit`` characters."""
    text = response.text.strip()
    if len(text) > limit:
        return text[:limit] + "..."
    return text
