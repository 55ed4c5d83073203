from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Sequence, Union

import pytest

from barcode_proxy.adapters.interfaces.provider import ProviderClient
from barcode_proxy.core.exceptions import ProviderError
from barcode_proxy.domain.models.product import Product
from barcode_proxy.domain.models.records import (
    BarcodeLookupItem,
    BarcodeLookupRecord,
    ProviderVariant,
    RawProviderRecord,
    UpcEanNoProduct,
    UpcEanProduct,
    UpcEanRecord,
)
from barcode_proxy.infrastructure.cache import MemoryCache
from barcode_proxy.infrastructure.rate_limit import RateLimiter
from barcode_proxy.services.lookup_service import BarcodeLookupService


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


Outcome = Union[RawProviderRecord, ProviderError]


class FakeProvider(ProviderClient):
    """Provider returning scripted outcomes and recording each call."""

    def __init__(
        self,
        name: str,
        variant: ProviderVariant,
        outcomes: Sequence[Outcome],
        clock: Optional[Callable[[], float]] = None,
        delay: float = 0.0,
    ):
        super().__init__(variant)
        self.provider_name = name
        self._outcomes = list(outcomes)
        self._clock = clock
        self._delay = delay
        self.calls: List[str] = []
        self.call_times: List[float] = []

    async def lookup(self, barcode: str) -> RawProviderRecord:
        self.calls.append(barcode)
        if self._clock is not None:
            self.call_times.append(self._clock())
        if self._delay:
            await asyncio.sleep(self._delay)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def primary_record(**fields) -> BarcodeLookupRecord:
    data = {
        "title": "Organic Peanut Butter",
        "brand": "Nutty Co",
        "description": "Creamy spread. Serving Size: 2 tbsp (32g). Keep cool.",
        "category": "Food > Spreads",
        "images": ["https://images.example/pb.jpg"],
        "ingredients": "Peanuts, salt",
    }
    data.update(fields)
    return BarcodeLookupRecord(item=BarcodeLookupItem(**data))


def secondary_record(**fields) -> UpcEanRecord:
    data = {
        "name": "Vitamin D3 Softgels",
        "brand": "Sunny Labs",
        "description": "Supports bone health. Serving Size: 1 softgel. 120 count",
        "category": "Supplements",
        "image": "https://images.example/d3.jpg",
    }
    data.update(fields)
    return UpcEanRecord(code="0123456789012", product=UpcEanProduct(**data))


def no_product_record(code: str = "123456789") -> UpcEanNoProduct:
    return UpcEanNoProduct(code=code)


def primary_failure(status: Optional[int] = 404, detail: str = '{"message":"not found"}') -> ProviderError:
    return ProviderError("barcodelookup", detail, provider_status=status)


def secondary_failure(status: Optional[int] = 500, detail: str = "upstream exploded") -> ProviderError:
    return ProviderError("upc_ean_lookup", detail, provider_status=status)


def build_service(
    primary_outcomes: Sequence[Outcome],
    secondary_outcomes: Sequence[Outcome],
    clock: Optional[FakeClock] = None,
    min_interval: float = 1.0,
    cache: Optional[MemoryCache] = None,
    cache_on_fallback_only: bool = True,
    deadline: Optional[float] = None,
) -> BarcodeLookupService:
    clock = clock or FakeClock()
    primary = FakeProvider("barcodelookup", ProviderVariant.PRIMARY, primary_outcomes, clock=clock)
    secondary = FakeProvider("upc_ean_lookup", ProviderVariant.SECONDARY, secondary_outcomes, clock=clock)
    return BarcodeLookupService(
        primary=primary,
        secondary=secondary,
        cache=cache or MemoryCache(max_entries=100, value_type=Product),
        rate_limiter=RateLimiter(min_interval=min_interval, clock=clock, sleep=clock.sleep),
        cache_on_fallback_only=cache_on_fallback_only,
        deadline=deadline,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
