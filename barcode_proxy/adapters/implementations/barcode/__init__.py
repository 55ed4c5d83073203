"""
Barcode lookup provider implementations.
"""

from barcode_proxy.adapters.implementations.barcode.barcode_lookup import (
    BarcodeLookupClient,
    PLATFORM_BARCODELOOKUP,
)
from barcode_proxy.adapters.implementations.barcode.upc_ean_lookup import (
    UpcEanLookupClient,
    PLATFORM_UPC_EAN_LOOKUP,
)
from barcode_proxy.adapters.implementations.barcode.normalizer import (
    ProductNormalizer,
    extract_serving_size,
)

__all__ = [
    "BarcodeLookupClient",
    "UpcEanLookupClient",
    "ProductNormalizer",
    "extract_serving_size",
    "PLATFORM_BARCODELOOKUP",
    "PLATFORM_UPC_EAN_LOOKUP",
]
