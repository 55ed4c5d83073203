"""
Services package for the Barcode Lookup Proxy.

Services orchestrate the lookup workflow, coordinating the cache, the rate
limiter, the provider clients and the normalizer. They depend on the
interfaces in ``barcode_proxy.adapters.interfaces`` rather than concrete
implementations.
"""

from barcode_proxy.services.lookup_service import (
    BarcodeLookupService,
    LookupResult,
    LookupSource,
    create_lookup_service,
)

__all__ = [
    "BarcodeLookupService",
    "LookupResult",
    "LookupSource",
    "create_lookup_service",
]
