from functools import lru_cache
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import os
from dotenv import load_dotenv


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Barcode Lookup Proxy"
    DEBUG: bool = False

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    # Provider credentials
    BARCODE_API_KEY: str = ""
    RAPIDAPI_KEY: str = ""

    # Provider selection, by registry type name
    PRIMARY_PROVIDER: str = "barcodelookup"
    SECONDARY_PROVIDER: str = "upc_ean_lookup"

    # Provider endpoints
    BARCODELOOKUP_BASE_URL: str = "https://api.barcodelookup.com/v3"
    UPC_EAN_LOOKUP_BASE_URL: str = "https://product-lookup-by-upc-or-ean.p.rapidapi.com"
    UPC_EAN_LOOKUP_HOST: str = "product-lookup-by-upc-or-ean.p.rapidapi.com"

    # External API timeout settings
    DEFAULT_TIMEOUT: float = 10  # seconds, per outbound request
    LOOKUP_DEADLINE: float = 0  # seconds for the whole network stage, 0 disables

    # Rate limiting
    MIN_REQUEST_INTERVAL_MS: int = 1000

    # Cache settings
    CACHE_MAX_ENTRIES: int = 10000  # 0 keeps every entry
    CACHE_TTL: int = 0  # seconds, 0 never expires
    CACHE_ON_FALLBACK_ONLY: bool = True

    # Status used for a missing or empty barcode
    BAD_REQUEST_STATUS_CODE: int = 500

    @field_validator("MIN_REQUEST_INTERVAL_MS", "CACHE_MAX_ENTRIES", "CACHE_TTL")
    @classmethod
    def non_negative(cls, v: int) -> int:
        """Reject negative intervals and bounds."""
        if v < 0:
            raise ValueError("must be zero or positive")
        return v

    @property
    def min_request_interval(self) -> float:
        """Minimum interval between outbound provider calls, in seconds."""
        return self.MIN_REQUEST_INTERVAL_MS / 1000.0

    @property
    def lookup_deadline(self) -> Optional[float]:
        """Deadline for the network stage of a lookup, or None."""
        return self.LOOKUP_DEADLINE if self.LOOKUP_DEADLINE > 0 else None


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(env_path)
    else:
        print(f"Warning: Environment file {env_path} not found")


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching for efficiency.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
