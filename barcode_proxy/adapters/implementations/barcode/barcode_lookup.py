import logging

import httpx
from pydantic import ValidationError

from barcode_proxy.adapters.implementations.http_connector import error_body, json_or_none
from barcode_proxy.adapters.interfaces.connector import APIConnector, HttpMethod
from barcode_proxy.adapters.interfaces.provider import APIStatus, ProviderClient
from barcode_proxy.core.config import Settings
from barcode_proxy.core.exceptions import ProviderError
from barcode_proxy.domain.models.records import (
    BarcodeLookupRecord,
    BarcodeLookupResponse,
    ProviderVariant,
)

logger = logging.getLogger(__name__)

PLATFORM_BARCODELOOKUP = "barcodelookup"


class BarcodeLookupClient(ProviderClient):
    """
    Client for the Barcode Lookup v3 ``/products`` endpoint.

    The barcode, a ``formatted=y`` flag and the API key are sent as query
    parameters. A successful response carries a ``products`` array whose
    first element is used.
    """

    provider_name = PLATFORM_BARCODELOOKUP

    def __init__(
        self,
        connector: APIConnector,
        api_key: str,
        base_url: str = "https://api.barcodelookup.com/v3",
        variant: ProviderVariant = ProviderVariant.PRIMARY
    ):
        super().__init__(variant)
        self.connector = connector
        self.api_key = api_key
        self.base_url = base_url

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        connector: APIConnector,
        variant: ProviderVariant
    ) -> "BarcodeLookupClient":
        return cls(
            connector=connector,
            api_key=settings.BARCODE_API_KEY,
            base_url=settings.BARCODELOOKUP_BASE_URL,
            variant=variant,
        )

    async def lookup(self, barcode: str) -> BarcodeLookupRecord:
        url = self.connector.build_url(self.base_url, "products")
        response = await self.connector.request(
            HttpMethod.GET,
            url,
            source=self.provider_name,
            params={"barcode": barcode, "formatted": "y", "key": self.api_key},
            headers={"Accept": "application/json"},
        )

        if not response.is_success:
            raise ProviderError(self.provider_name, error_body(response), provider_status=response.status_code)

        return self.parse(response)

    def parse(self, response: httpx.Response) -> BarcodeLookupRecord:
        """
        Parse a successful response into a record.

        Args:
            response: 2xx response from the products endpoint

        Returns:
            BarcodeLookupRecord: Record wrapping the first product

        Raises:
            ProviderError: If the body is not JSON, has an unexpected shape,
                or lists no products
        """
        payload = json_or_none(response)
        if payload is None:
            raise ProviderError(
                self.provider_name,
                "Response body is not valid JSON",
                provider_status=response.status_code
            )

        try:
            parsed = BarcodeLookupResponse.model_validate(payload)
        except ValidationError as e:
            raise ProviderError(
                self.provider_name,
                f"Unexpected response shape ({e.error_count()} validation errors)",
                provider_status=response.status_code,
                original_exception=e
            )

        if not parsed.products:
            raise ProviderError(
                self.provider_name,
                "No products in response",
                provider_status=response.status_code
            )

        return BarcodeLookupRecord(item=parsed.products[0])

    def is_configured(self) -> APIStatus:
        return APIStatus.AVAILABLE if self.api_key else APIStatus.UNKNOWN
