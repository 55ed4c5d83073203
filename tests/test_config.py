from __future__ import annotations

import pytest
from pydantic import ValidationError

from barcode_proxy.adapters.factory import ProviderFactory
from barcode_proxy.adapters.implementations import BarcodeLookupClient, HttpxConnector, UpcEanLookupClient
from barcode_proxy.core.config import Settings
from barcode_proxy.core.exceptions import ProviderNotFoundError
from barcode_proxy.domain.models.records import ProviderVariant
from barcode_proxy.services.lookup_service import create_lookup_service


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.min_request_interval == 1.0
    assert settings.lookup_deadline is None
    assert settings.CACHE_MAX_ENTRIES == 10000
    assert settings.CACHE_ON_FALLBACK_ONLY is True
    assert settings.BAD_REQUEST_STATUS_CODE == 500


def test_values_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("MIN_REQUEST_INTERVAL_MS", "250")
    monkeypatch.setenv("LOOKUP_DEADLINE", "2.5")
    monkeypatch.setenv("CACHE_ON_FALLBACK_ONLY", "false")

    settings = Settings(_env_file=None)

    assert settings.min_request_interval == 0.25
    assert settings.lookup_deadline == 2.5
    assert settings.CACHE_ON_FALLBACK_ONLY is False


@pytest.mark.parametrize("field", ["MIN_REQUEST_INTERVAL_MS", "CACHE_MAX_ENTRIES", "CACHE_TTL"])
def test_negative_values_are_rejected(field: str) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: -1})


def test_factory_builds_configured_providers() -> None:
    settings = Settings(_env_file=None, BARCODE_API_KEY="bk", RAPIDAPI_KEY="rk")
    connector = HttpxConnector()
    factory = ProviderFactory()

    primary = factory.create_provider("barcodelookup", settings, connector, ProviderVariant.PRIMARY)
    secondary = factory.create_provider("upc_ean_lookup", settings, connector, ProviderVariant.SECONDARY)

    assert isinstance(primary, BarcodeLookupClient)
    assert primary.api_key == "bk"
    assert isinstance(secondary, UpcEanLookupClient)
    assert secondary.host == settings.UPC_EAN_LOOKUP_HOST
    assert sorted(factory.get_provider_types()) == ["barcodelookup", "upc_ean_lookup"]


def test_factory_rejects_unknown_provider() -> None:
    with pytest.raises(ProviderNotFoundError) as exc_info:
        ProviderFactory().create_provider(
            "nope", Settings(_env_file=None), HttpxConnector(), ProviderVariant.PRIMARY
        )

    assert "barcodelookup" in str(exc_info.value)
    assert "upc_ean_lookup" in str(exc_info.value)


def test_providers_can_swap_positions() -> None:
    settings = Settings(
        _env_file=None,
        PRIMARY_PROVIDER="upc_ean_lookup",
        SECONDARY_PROVIDER="barcodelookup",
        MIN_REQUEST_INTERVAL_MS=0,
        CACHE_TTL=60,
    )

    service = create_lookup_service(settings)

    assert isinstance(service.primary, UpcEanLookupClient)
    assert service.primary.variant == ProviderVariant.PRIMARY
    assert isinstance(service.secondary, BarcodeLookupClient)
    assert service.secondary.variant == ProviderVariant.SECONDARY
    assert service.rate_limiter.min_interval == 0
    assert service.cache.default_ttl == 60
