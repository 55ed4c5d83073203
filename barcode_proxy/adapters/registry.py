import logging
from typing import Dict, Type, List, Optional

from barcode_proxy.adapters.interfaces.provider import ProviderClient

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    Registry of available provider client implementations.
    Maps provider type strings to their implementing classes.
    """

    def __init__(self):
        self._providers: Dict[str, Type[ProviderClient]] = {}
        logger.debug("Initialized ProviderRegistry")

    def register(self, provider_type: str, provider_class: Type[ProviderClient]) -> None:
        """
        Register a provider implementation.

        Args:
            provider_type: Type identifier for the provider
            provider_class: Class to instantiate for this provider type

        Raises:
            ValueError: If the provider_type is invalid or already registered
        """
        if not provider_type or not isinstance(provider_type, str):
            raise ValueError("Provider type must be a non-empty string")

        if not isinstance(provider_class, type) or not issubclass(provider_class, ProviderClient):
            raise ValueError("Provider class must be a subclass of ProviderClient")

        if provider_type in self._providers:
            raise ValueError(f"Provider type '{provider_type}' is already registered")

        self._providers[provider_type] = provider_class
        logger.info(f"Registered provider type: {provider_type}")

    def get(self, provider_type: str) -> Optional[Type[ProviderClient]]:
        """
        Retrieve a provider implementation by type.

        Args:
            provider_type: Type identifier for the provider

        Returns:
            The provider class if found, None otherwise
        """
        return self._providers.get(provider_type)

    def list(self) -> List[str]:
        """List all registered provider types."""
        return list(self._providers.keys())
