"""
Provider implementations for the barcode lookup services.
"""

from barcode_proxy.adapters.implementations.http_connector import HttpxConnector
from barcode_proxy.adapters.implementations.barcode import (
    BarcodeLookupClient,
    UpcEanLookupClient,
    ProductNormalizer,
    PLATFORM_BARCODELOOKUP,
    PLATFORM_UPC_EAN_LOOKUP,
)

# Mapping of provider types to their implementation classes
PROVIDER_IMPLEMENTATIONS = {
    PLATFORM_BARCODELOOKUP: BarcodeLookupClient,
    PLATFORM_UPC_EAN_LOOKUP: UpcEanLookupClient,
}

__all__ = [
    "HttpxConnector",
    "BarcodeLookupClient",
    "UpcEanLookupClient",
    "ProductNormalizer",
    "PLATFORM_BARCODELOOKUP",
    "PLATFORM_UPC_EAN_LOOKUP",
    "PROVIDER_IMPLEMENTATIONS",
]
