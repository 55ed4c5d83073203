"""Domain models: the canonical Product and typed provider records."""

from barcode_proxy.domain.models.product import Product, unknown_product
from barcode_proxy.domain.models.records import (
    BarcodeLookupRecord,
    ProviderVariant,
    RawProviderRecord,
    is_no_product,
    UpcEanNoProduct,
    UpcEanRecord,
)

__all__ = [
    "Product",
    "unknown_product",
    "BarcodeLookupRecord",
    "ProviderVariant",
    "RawProviderRecord",
    "is_no_product",
    "UpcEanNoProduct",
    "UpcEanRecord",
]
