from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from enum import Enum

import httpx


class HttpMethod(str, Enum):
    """Methods the provider clients issue. Both lookup services are read-only."""
    GET = "GET"


class APIConnector(ABC):
    """
    Transport shared by the provider clients.

    A connector issues one request and returns the response whatever its
    status; deciding what a 404 or a 5xx means is left to each provider.
    Only failures to get a response at all (timeouts, refused connections,
    DNS errors) are raised, as ``ProviderError`` tagged with ``source``.
    """

    @abstractmethod
    async def request(
        self,
        method: HttpMethod,
        url: str,
        source: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Send a single request, without retries.

        Args:
            method: HTTP method
            url: Absolute URL
            source: Provider name to attribute failures to
            params: Query parameters
            headers: Request headers, typically credentials

        Returns:
            httpx.Response: The response, including error statuses

        Raises:
            ProviderError: If no response was received
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release pooled connections."""
        pass

    def build_url(self, base_url: str, path: str) -> str:
        """
        Join a provider base URL and a path.

        Slashes at the seam are collapsed, so ``build_url("https://h/v3/", "/products")``
        gives ``https://h/v3/products``. ``path`` is not escaped; callers quote
        any caller-supplied segment themselves.
        """
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
