"""
Adapters package for the Barcode Lookup Proxy.

This package contains components for integrating with barcode lookup
providers, including:
- Abstract interfaces that define the contracts for provider clients
- Concrete implementations for each provider
- Factory and registry for selecting providers by configuration
"""

from . import interfaces

from .factory import ProviderFactory
from .registry import ProviderRegistry

__all__ = [
    'interfaces',
    'ProviderFactory',
    'ProviderRegistry',
]
