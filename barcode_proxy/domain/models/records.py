"""
Typed intermediate records produced by provider clients.

Each provider response shape is parsed into exactly one of these models, so
the normalizer never inspects untyped payloads. Records are transient: they
are consumed by the normalizer and never cached or returned to callers.
"""
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderVariant(str, Enum):
    """Position of a provider in the fallback chain."""
    PRIMARY = "primary"
    SECONDARY = "secondary"


class _ProviderPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class BarcodeLookupItem(_ProviderPayload):
    """One entry of the Barcode Lookup ``products`` array."""
    barcode_number: Optional[str] = None
    title: Optional[str] = None
    brand: Optional[str] = None
    manufacturer: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    ingredients: Optional[str] = None
    nutrition_facts: Optional[str] = None
    size: Optional[str] = None

    @field_validator("images", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


class BarcodeLookupResponse(_ProviderPayload):
    products: List[BarcodeLookupItem] = Field(default_factory=list)


class UpcEanProduct(_ProviderPayload):
    """The ``product`` object of a UPC/EAN lookup response."""
    name: Optional[str] = None
    brand: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    region: Optional[str] = None


class UpcEanResponse(_ProviderPayload):
    code: Optional[str] = None
    codeType: Optional[str] = None
    product: Optional[UpcEanProduct] = None

    @field_validator("product", mode="before")
    @classmethod
    def falsy_as_missing(cls, v):
        if not v and not isinstance(v, dict):
            return None
        return v


class BarcodeLookupRecord(BaseModel):
    """Primary provider record: the first product returned."""
    kind: Literal["barcodelookup"] = "barcodelookup"
    variant: ProviderVariant = ProviderVariant.PRIMARY
    item: BarcodeLookupItem


class UpcEanRecord(BaseModel):
    """Secondary provider record carrying a product payload."""
    kind: Literal["upc_ean"] = "upc_ean"
    variant: ProviderVariant = ProviderVariant.SECONDARY
    code: Optional[str] = None
    product: UpcEanProduct


class UpcEanNoProduct(BaseModel):
    """Secondary provider recognized the code but has no product for it."""
    kind: Literal["upc_ean_no_product"] = "upc_ean_no_product"
    variant: ProviderVariant = ProviderVariant.SECONDARY
    code: str


RawProviderRecord = Union[BarcodeLookupRecord, UpcEanRecord, UpcEanNoProduct]


# Records meaning "the provider knows this code but has no product for it"
NO_PRODUCT_RECORDS = (UpcEanNoProduct,)


def is_no_product(record: RawProviderRecord) -> bool:
    return isinstance(record, NO_PRODUCT_RECORDS)
