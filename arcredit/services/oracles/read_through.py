from __future__ import annotations

from arcredit.models.constants import SUPPORTED_PAYMENT_CURRENCIES
from arcredit.models.units import Winston
from arcredit.services.cache import ReadThroughCache

from .base import ArweaveToFiatOracle, BytesToWinstonOracle

DEFAULT_FIAT_CACHE_TTL_MS = 60_000
DEFAULT_BYTES_CACHE_TTL_MS = 60_000
DEFAULT_BYTES_CACHE_CAPACITY = 100


class ReadThroughArweaveToFiatOracle(ArweaveToFiatOracle):
    """Caches fiat prices per currency code."""

    def __init__(
        self,
        oracle: ArweaveToFiatOracle,
        cache_ttl_ms: int = DEFAULT_FIAT_CACHE_TTL_MS,
        cache_capacity: int = len(SUPPORTED_PAYMENT_CURRENCIES),
    ):
        self._oracle = oracle
        self._cache: ReadThroughCache[str, float] = ReadThroughCache(
            read_through_function=oracle.get_fiat_price_for_one_ar,
            cache_capacity=cache_capacity,
            cache_ttl_ms=cache_ttl_ms,
            name="fiat",
        )

    async def get_fiat_price_for_one_ar(self, currency: str) -> float:  # type: ignore[override]
        return await self._cache.get(currency.lower())


class ReadThroughBytesToWinstonOracle(BytesToWinstonOracle):
    """Caches byte price quotes per (chunk-rounded) byte count."""

    def __init__(
        self,
        oracle: BytesToWinstonOracle,
        cache_ttl_ms: int = DEFAULT_BYTES_CACHE_TTL_MS,
        cache_capacity: int = DEFAULT_BYTES_CACHE_CAPACITY,
    ):
        self._oracle = oracle
        self._cache: ReadThroughCache[int, Winston] = ReadThroughCache(
            read_through_function=oracle.get_winston_for_bytes,
            cache_capacity=cache_capacity,
            cache_ttl_ms=cache_ttl_ms,
            name="bytes",
        )

    async def get_winston_for_bytes(self, byte_count: int) -> Winston:  # type: ignore[override]
        return await self._cache.get(byte_count)
