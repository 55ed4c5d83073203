from abc import ABC, abstractmethod
from typing import Any, Dict
from enum import Enum
import logging

from barcode_proxy.domain.models.records import ProviderVariant, RawProviderRecord

logger = logging.getLogger(__name__)


class APIStatus(str, Enum):
    """Enum defining possible API status values."""
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


class ProviderClient(ABC):
    """
    Abstract base interface for barcode lookup provider clients.

    A provider client knows how to build a request for one upstream lookup
    service and how to parse that service's native response into a typed
    raw record. It never normalizes; that is the normalizer's job.

    Attributes:
        provider_name: Registry type name of the provider
        variant: Position of the provider in the fallback chain
    """

    provider_name: str = "provider"

    def __init__(self, variant: ProviderVariant = ProviderVariant.PRIMARY):
        self.variant = variant

    @abstractmethod
    async def lookup(self, barcode: str) -> RawProviderRecord:
        """
        Looks a barcode up with the provider.

        Args:
            barcode: Barcode string, embedded verbatim in the request.

        Returns:
            RawProviderRecord: The typed record parsed from the response.

        Raises:
            ProviderError: On a non-success status, a transport failure or a
                body that does not match the provider's expected shape.
        """
        pass

    def is_configured(self) -> APIStatus:
        """
        Reports whether the client has what it needs to make calls.

        Returns:
            APIStatus: AVAILABLE when credentials are present, UNKNOWN otherwise.
        """
        return APIStatus.AVAILABLE

    def get_capabilities(self) -> Dict[str, Any]:
        """
        Returns a description of this provider for diagnostics.

        Returns:
            Dict[str, Any]: Provider name, variant and configuration status.
        """
        return {
            "provider": self.provider_name,
            "variant": self.variant.value,
            "status": self.is_configured().value,
        }
