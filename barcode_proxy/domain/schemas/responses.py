from typing import List

from pydantic import BaseModel, Field

from barcode_proxy.domain.models.product import Product


class NutritionSchema(BaseModel):
    serving_size: str = ""


class ProductSchema(BaseModel):
    """Wire form of a canonical product."""
    title: str = ""
    brand: str = ""
    description: str = ""
    category: str = ""
    image: str = ""
    nutrition: NutritionSchema = Field(default_factory=NutritionSchema)
    ingredients: str = ""
    allergens: str = ""
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_product(cls, product: Product) -> "ProductSchema":
        return cls.model_validate(product.to_dict())


class LookupResponse(BaseModel):
    """Single-element ``products`` list, mirroring the primary provider's shape."""
    products: List[ProductSchema]

    @classmethod
    def from_product(cls, product: Product) -> "LookupResponse":
        return cls(products=[ProductSchema.from_product(product)])


class ErrorResponse(BaseModel):
    error: str
