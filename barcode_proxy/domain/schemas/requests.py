from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class LookupRequest(BaseModel):
    """Inbound lookup body: ``{"barcode": "..."}``."""

    model_config = ConfigDict(extra="ignore")

    barcode: Optional[str] = None

    @field_validator("barcode", mode="before")
    @classmethod
    def coerce_barcode(cls, v: Any) -> Optional[str]:
        """Accept integer barcodes; anything else that is not a string is missing."""
        if isinstance(v, bool):
            return None
        if isinstance(v, int):
            return str(v)
        if isinstance(v, str):
            return v
        return None

    def has_barcode(self) -> bool:
        return bool(self.barcode and self.barcode.strip())
