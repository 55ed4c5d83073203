from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


UNKNOWN_PRODUCT_TITLE = "Unknown Product"
SERVING_SIZE_NOT_SPECIFIED = "Not specified"
SERVING_SIZE_SEE_DESCRIPTION = "See product description"


@dataclass
class Product:
    """Canonical product returned to callers and stored in the cache."""

    title: str = ""
    brand: str = ""
    description: str = ""
    category: str = ""
    image: str = ""
    serving_size: str = ""
    ingredients: str = ""
    allergens: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __init__(
        self,
        title: Optional[str] = None,
        brand: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        image: Optional[str] = None,
        serving_size: Optional[str] = None,
        ingredients: Optional[str] = None,
        allergens: Optional[List[str]] = None,
        warnings: Optional[List[str]] = None,
    ):
        """Initialize product, replacing missing values with empty defaults."""
        self.title = title or ""
        self.brand = brand or ""
        self.description = description or ""
        self.category = category or ""
        self.image = image or ""
        self.serving_size = serving_size or ""
        self.ingredients = ingredients or ""
        self.allergens = list(allergens or [])
        self.warnings = list(warnings or [])

    def is_placeholder(self) -> bool:
        """Checks if this is the Unknown Product placeholder."""
        return self.title == UNKNOWN_PRODUCT_TITLE and not (
            self.brand or self.description or self.category or self.image
        )

    def to_dict(self) -> Dict[str, Any]:
        """Wire form, matching the shape the front end consumes."""
        return {
            "title": self.title,
            "brand": self.brand,
            "description": self.description,
            "category": self.category,
            "image": self.image,
            "nutrition": {
                "serving_size": self.serving_size,
            },
            "ingredients": self.ingredients,
            "allergens": ", ".join(self.allergens),
            "warnings": list(self.warnings),
        }


def unknown_product() -> Product:
    """Placeholder for a barcode the provider knows but has no data for."""
    return Product(
        title=UNKNOWN_PRODUCT_TITLE,
        serving_size=SERVING_SIZE_NOT_SPECIFIED,
    )
