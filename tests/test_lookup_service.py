from __future__ import annotations

import asyncio
from typing import Any

import pytest

from barcode_proxy.core.exceptions import AggregateLookupError, BadRequestError, LookupCancelledError
from barcode_proxy.domain.models.product import Product, unknown_product
from barcode_proxy.infrastructure.cache import MemoryCache
from barcode_proxy.services.lookup_service import LookupSource

from conftest import (
    FakeClock,
    build_service,
    no_product_record,
    primary_failure,
    primary_record,
    secondary_failure,
    secondary_record,
)


class BrokenCache(MemoryCache):
    """Cache whose reads and writes always fail."""

    async def get(self, key: str) -> Any:
        raise ConnectionError("cache unavailable")

    async def set(self, key: str, value: Any, ttl=None) -> bool:
        raise ConnectionError("cache unavailable")


def test_cache_hit_skips_providers() -> None:
    cache = MemoryCache(value_type=Product)
    service = build_service([primary_record()], [secondary_record()], cache=cache)
    cached = Product(title="From Cache", serving_size="1 cup")

    async def scenario():
        await cache.set("555", cached)
        return await service.lookup("555")

    result = asyncio.run(scenario())

    assert result.source == LookupSource.CACHE
    assert result.product == cached
    assert service.primary.calls == []
    assert service.secondary.calls == []


def test_primary_success_is_returned_and_not_cached() -> None:
    service = build_service([primary_record()], [secondary_record()])

    async def scenario():
        result = await service.lookup("123")
        return result, await service.cache.get("123")

    result, cached = asyncio.run(scenario())

    assert result.source == LookupSource.PRIMARY
    assert result.product.title == "Organic Peanut Butter"
    assert result.product.serving_size == "2 tbsp (32g)"
    assert cached is None
    assert service.secondary.calls == []


def test_primary_success_is_cached_when_policy_allows() -> None:
    service = build_service([primary_record()], [secondary_record()], cache_on_fallback_only=False)

    async def scenario():
        first = await service.lookup("123")
        second = await service.lookup("123")
        return first, second

    first, second = asyncio.run(scenario())

    assert first.source == LookupSource.PRIMARY
    assert second.source == LookupSource.CACHE
    assert second.product == first.product
    assert service.primary.calls == ["123"]


def test_repeated_primary_lookups_hit_the_network_each_time() -> None:
    service = build_service([primary_record()], [secondary_record()])

    async def scenario():
        await service.lookup("123")
        await service.lookup("123")

    asyncio.run(scenario())

    assert service.primary.calls == ["123", "123"]


def test_fallback_success_is_returned_and_cached() -> None:
    service = build_service([primary_failure()], [secondary_record()])

    async def scenario():
        first = await service.lookup("0123456789012")
        second = await service.lookup("0123456789012")
        return first, second

    first, second = asyncio.run(scenario())

    assert first.source == LookupSource.SECONDARY
    assert first.product.title == "Vitamin D3 Softgels"
    assert first.product.serving_size == "1 softgel"
    assert second.source == LookupSource.CACHE
    assert second.product == first.product
    assert service.primary.calls == ["0123456789012"]
    assert service.secondary.calls == ["0123456789012"]


def test_no_product_fallback_returns_uncached_placeholder() -> None:
    service = build_service([primary_failure()], [no_product_record()])

    async def scenario():
        first = await service.lookup("123456789")
        second = await service.lookup("123456789")
        return first, second

    first, second = asyncio.run(scenario())

    assert first.source == LookupSource.PLACEHOLDER
    assert first.product == unknown_product()
    assert first.product.warnings == []
    assert second.source == LookupSource.PLACEHOLDER
    assert service.secondary.calls == ["123456789", "123456789"]


def test_both_providers_failing_raises_aggregate_error() -> None:
    primary_error = primary_failure(404, "Product not found")
    secondary_error = secondary_failure(503, "Service unavailable")
    service = build_service([primary_error], [secondary_error])

    with pytest.raises(AggregateLookupError) as exc_info:
        asyncio.run(service.lookup("999"))

    error = exc_info.value
    assert error.primary_error is primary_error
    assert error.secondary_error is secondary_error
    assert error.status_code == 502
    assert error.detail.startswith("Both APIs failed.")
    assert "Product not found" in error.detail
    assert "Service unavailable" in error.detail
    assert "404" in error.detail and "503" in error.detail


def test_failed_lookup_is_not_cached() -> None:
    service = build_service([primary_failure()], [secondary_failure(), secondary_record()])

    async def scenario():
        with pytest.raises(AggregateLookupError):
            await service.lookup("42")
        return await service.lookup("42")

    result = asyncio.run(scenario())

    assert result.source == LookupSource.SECONDARY
    assert service.secondary.calls == ["42", "42"]


@pytest.mark.parametrize("barcode", ["", "   ", None, 12345])
def test_missing_barcode_is_rejected_before_any_call(barcode) -> None:
    service = build_service([primary_record()], [secondary_record()])

    with pytest.raises(BadRequestError) as exc_info:
        asyncio.run(service.lookup(barcode))

    assert exc_info.value.detail == "Barcode is required"
    assert service.primary.calls == []
    assert service.secondary.calls == []
    assert service.rate_limiter.last_call is None


def test_rate_limiter_acquired_once_per_network_lookup() -> None:
    clock = FakeClock()
    service = build_service([primary_failure()], [secondary_record()], clock=clock)

    async def scenario():
        await service.lookup("1")
        await service.lookup("2")

    asyncio.run(scenario())

    # primary and fallback of one lookup share one permit
    assert service.primary.call_times[0] == service.secondary.call_times[0]
    assert service.primary.call_times[1] - service.primary.call_times[0] == pytest.approx(1.0)
    assert clock.sleeps == [pytest.approx(1.0)]


def test_cache_hits_do_not_consume_rate_limit() -> None:
    clock = FakeClock()
    service = build_service([primary_failure()], [secondary_record()], clock=clock)

    async def scenario():
        await service.lookup("1")
        for _ in range(3):
            await service.lookup("1")

    asyncio.run(scenario())

    assert clock.sleeps == []


def test_concurrent_misses_are_spaced_by_min_interval() -> None:
    clock = FakeClock()
    service = build_service([primary_record()], [secondary_record()], clock=clock)

    async def scenario():
        await asyncio.gather(*(service.lookup(str(n)) for n in range(3)))

    asyncio.run(scenario())

    times = sorted(service.primary.call_times)
    assert times[1] - times[0] >= 1.0
    assert times[2] - times[1] >= 1.0


def test_broken_cache_is_treated_as_miss() -> None:
    service = build_service([primary_failure()], [secondary_record()], cache=BrokenCache())

    result = asyncio.run(service.lookup("777"))

    assert result.source == LookupSource.SECONDARY
    assert result.product.title == "Vitamin D3 Softgels"


def test_malformed_cache_value_is_treated_as_miss() -> None:
    cache = MemoryCache()
    service = build_service([primary_record()], [secondary_record()], cache=cache)

    async def scenario():
        await cache.set("888", {"title": "raw dict"})
        return await service.lookup("888")

    result = asyncio.run(scenario())

    assert result.source == LookupSource.PRIMARY
    assert service.primary.calls == ["888"]


def test_deadline_cancels_slow_lookup() -> None:
    service = build_service([primary_record()], [secondary_record()], deadline=0.05)
    service.primary._delay = 1.0

    with pytest.raises(LookupCancelledError) as exc_info:
        asyncio.run(service.lookup("321"))

    assert exc_info.value.status_code == 504
    assert "321" in exc_info.value.detail


def test_per_call_timeout_overrides_service_deadline() -> None:
    service = build_service([primary_record()], [secondary_record()])
    service.primary._delay = 1.0

    with pytest.raises(LookupCancelledError):
        asyncio.run(service.lookup("321", timeout=0.05))


def test_describe_reports_chain_state() -> None:
    service = build_service([primary_record()], [secondary_record()])

    description = asyncio.run(service.describe())

    assert description["primary"]["provider"] == "barcodelookup"
    assert description["secondary"]["variant"] == "secondary"
    assert description["cache"]["backend"] == "memory"
    assert description["rate_limiter"]["min_interval_ms"] == 1000
    assert description["cache_on_fallback_only"] is True
