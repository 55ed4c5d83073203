import logging
from typing import List, Optional

from barcode_proxy.core.config import Settings
from barcode_proxy.core.exceptions import ProviderConfigError, ProviderNotFoundError
from barcode_proxy.adapters.interfaces.connector import APIConnector
from barcode_proxy.adapters.interfaces.provider import APIStatus, ProviderClient
from barcode_proxy.adapters.registry import ProviderRegistry
from barcode_proxy.adapters.implementations import PROVIDER_IMPLEMENTATIONS
from barcode_proxy.domain.models.records import ProviderVariant

logger = logging.getLogger(__name__)


class ProviderFactory:
    """
    Factory for creating provider client instances.
    Uses a registry to instantiate the appropriate client based on type.
    """

    def __init__(self, registry: Optional[ProviderRegistry] = None):
        """
        Initialize the provider factory.

        Args:
            registry: Optional registry; when omitted a registry holding the
                built-in providers is created
        """
        if registry is None:
            registry = ProviderRegistry()
            for provider_type, provider_class in PROVIDER_IMPLEMENTATIONS.items():
                registry.register(provider_type, provider_class)
        self.registry = registry
        logger.debug("Initialized ProviderFactory")

    def create_provider(
        self,
        provider_type: str,
        settings: Settings,
        connector: APIConnector,
        variant: ProviderVariant
    ) -> ProviderClient:
        """
        Create a provider client of the specified type.

        Args:
            provider_type: Type of provider to create (e.g., 'barcodelookup')
            settings: Application settings holding credentials and endpoints
            connector: Shared HTTP connector
            variant: Position of the provider in the fallback chain

        Returns:
            An instance of the requested provider client

        Raises:
            ProviderNotFoundError: If the provider type is not registered
            ProviderConfigError: If the client cannot be built
        """
        provider_class = self.registry.get(provider_type)
        if not provider_class:
            logger.error(f"Provider type '{provider_type}' not found in registry")
            raise ProviderNotFoundError(
                f"Provider type '{provider_type}' not found in registry "
                f"(available: {', '.join(self.get_provider_types())})"
            )

        try:
            provider = provider_class.from_settings(settings, connector, variant)
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"Error creating {provider_type} provider: {str(e)}")
            raise ProviderConfigError(f"Failed to create {provider_type} provider: {str(e)}") from e

        if provider.is_configured() != APIStatus.AVAILABLE:
            logger.warning(f"{provider_type} provider has no API key configured")

        logger.info(f"Created {provider_type} provider as {variant.value}")
        return provider

    def get_provider_types(self) -> List[str]:
        """List all available provider types."""
        return self.registry.list()
