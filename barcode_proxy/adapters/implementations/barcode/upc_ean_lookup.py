import logging
from typing import Optional, Union
from urllib.parse import quote

from pydantic import ValidationError

from barcode_proxy.adapters.implementations.http_connector import error_body, json_or_none
from barcode_proxy.adapters.interfaces.connector import APIConnector, HttpMethod
from barcode_proxy.adapters.interfaces.provider import APIStatus, ProviderClient
from barcode_proxy.core.config import Settings
from barcode_proxy.core.exceptions import ProviderError
from barcode_proxy.domain.models.records import (
    ProviderVariant,
    UpcEanNoProduct,
    UpcEanRecord,
    UpcEanResponse,
)

logger = logging.getLogger(__name__)

PLATFORM_UPC_EAN_LOOKUP = "upc_ean_lookup"


class UpcEanLookupClient(ProviderClient):
    """
    Client for the "Product Lookup by UPC or EAN" service on RapidAPI.

    The barcode travels as a path segment and credentials as the
    ``x-rapidapi-key``/``x-rapidapi-host`` header pair. The service answers
    a known code without product data with ``{"code": ...}`` and no
    ``product``, often under an error status; that case is returned as
    ``UpcEanNoProduct`` instead of an error.
    """

    provider_name = PLATFORM_UPC_EAN_LOOKUP

    def __init__(
        self,
        connector: APIConnector,
        api_key: str,
        host: str = "product-lookup-by-upc-or-ean.p.rapidapi.com",
        base_url: Optional[str] = None,
        variant: ProviderVariant = ProviderVariant.SECONDARY
    ):
        super().__init__(variant)
        self.connector = connector
        self.api_key = api_key
        self.host = host
        self.base_url = base_url or f"https://{host}"

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        connector: APIConnector,
        variant: ProviderVariant
    ) -> "UpcEanLookupClient":
        return cls(
            connector=connector,
            api_key=settings.RAPIDAPI_KEY,
            host=settings.UPC_EAN_LOOKUP_HOST,
            base_url=settings.UPC_EAN_LOOKUP_BASE_URL,
            variant=variant,
        )

    async def lookup(self, barcode: str) -> Union[UpcEanRecord, UpcEanNoProduct]:
        url = self.connector.build_url(self.base_url, f"code/{quote(barcode, safe='')}")
        response = await self.connector.request(
            HttpMethod.GET,
            url,
            source=self.provider_name,
            headers={
                "x-rapidapi-key": self.api_key,
                "x-rapidapi-host": self.host,
            },
        )

        payload = json_or_none(response)
        parsed: Optional[UpcEanResponse] = None
        if payload is not None:
            try:
                parsed = UpcEanResponse.model_validate(payload)
            except ValidationError as e:
                logger.debug(f"{self.provider_name}: unexpected response shape: {e}")

        if parsed is not None and parsed.code and parsed.product is None:
            logger.info(f"{self.provider_name}: code {parsed.code} recognized without product data")
            return UpcEanNoProduct(code=parsed.code)

        if not response.is_success:
            raise ProviderError(self.provider_name, error_body(response), provider_status=response.status_code)

        if payload is None:
            raise ProviderError(
                self.provider_name,
                "Response body is not valid JSON",
                provider_status=response.status_code
            )
        if parsed is None:
            raise ProviderError(
                self.provider_name,
                "Unexpected response shape",
                provider_status=response.status_code
            )
        if parsed.product is None:
            raise ProviderError(
                self.provider_name,
                "Response carries neither a code nor a product",
                provider_status=response.status_code
            )

        return UpcEanRecord(code=parsed.code, product=parsed.product)

    def is_configured(self) -> APIStatus:
        return APIStatus.AVAILABLE if self.api_key else APIStatus.UNKNOWN
