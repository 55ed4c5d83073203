"""
Interfaces package for the Barcode Lookup Proxy.

This package contains the abstract base interfaces used to standardize
interactions with barcode lookup providers.
"""

from .provider import ProviderClient, APIStatus
from .connector import APIConnector, HttpMethod
from .normalizer import DataNormalizer
from .cache import CacheStrategy

__all__ = [
    # Provider interface
    'ProviderClient',
    'APIStatus',

    # Connector interface
    'APIConnector',
    'HttpMethod',

    # Normalizer interface
    'DataNormalizer',

    # Cache interface
    'CacheStrategy',
]
