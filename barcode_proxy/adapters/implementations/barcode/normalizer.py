"""
Mapping of provider records onto the canonical Product.

Serving size is never reported as a dedicated field by either provider, so it
is pulled out of free text with ``extract_serving_size``. The pattern matches
"Serving Size" followed by a colon or whitespace, case-insensitively, and
captures everything up to the next period. When nothing matches the value
falls back to "See product description", or "Not specified" when there is no
description at all.
"""
import re
from typing import Optional

from barcode_proxy.adapters.interfaces.normalizer import DataNormalizer
from barcode_proxy.domain.models.product import (
    SERVING_SIZE_NOT_SPECIFIED,
    SERVING_SIZE_SEE_DESCRIPTION,
    UNKNOWN_PRODUCT_TITLE,
    Product,
    unknown_product,
)
from barcode_proxy.domain.models.records import (
    BarcodeLookupRecord,
    RawProviderRecord,
    UpcEanNoProduct,
    UpcEanRecord,
)

SERVING_SIZE_PATTERN = re.compile(r"Serving Size[:\s]+([^.]+)", re.IGNORECASE)


def extract_serving_size(text: Optional[str]) -> Optional[str]:
    """Return the first "Serving Size: <value>" value in ``text``, or None."""
    if not text:
        return None
    match = SERVING_SIZE_PATTERN.search(text)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def resolve_serving_size(description: Optional[str], *sources: Optional[str]) -> str:
    """
    Pick a serving size from ``sources`` then ``description``.

    Args:
        description: Product description, also used to choose the default
        *sources: Other free-text fields to search first

    Returns:
        str: Extracted value or one of the fixed defaults
    """
    for text in (*sources, description):
        found = extract_serving_size(text)
        if found:
            return found
    if description:
        return SERVING_SIZE_SEE_DESCRIPTION
    return SERVING_SIZE_NOT_SPECIFIED


class ProductNormalizer(DataNormalizer[RawProviderRecord, Product]):
    """Normalizes Barcode Lookup and UPC/EAN lookup records."""

    def normalize_primary(self, record: RawProviderRecord) -> Product:
        if not isinstance(record, BarcodeLookupRecord):
            return self.normalize_unrecognized(record)

        item = record.item
        return Product(
            title=item.title,
            brand=item.brand or item.manufacturer,
            description=item.description,
            category=item.category,
            image=item.images[0] if item.images else "",
            serving_size=resolve_serving_size(item.description, item.nutrition_facts),
            ingredients=item.ingredients,
        )

    def normalize_secondary(self, record: RawProviderRecord) -> Product:
        if isinstance(record, UpcEanNoProduct):
            return unknown_product()
        if not isinstance(record, UpcEanRecord):
            return self.normalize_unrecognized(record)

        product = record.product
        return Product(
            title=product.name or UNKNOWN_PRODUCT_TITLE,
            brand=product.brand,
            description=product.description,
            category=product.category,
            image=product.image,
            serving_size=resolve_serving_size(product.description),
            # the UPC/EAN service folds ingredients into the description
            ingredients=product.description,
        )

    def normalize_unrecognized(self, record: RawProviderRecord) -> Product:
        return unknown_product()
