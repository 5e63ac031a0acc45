from __future__ import annotations

"""Concrete upstream oracles and factories.

'static' oracles return fixed placeholder values so the service can run
offline (local development, demos); the live kinds call public HTTP APIs.
"""
import asyncio
import logging
from typing import Callable, Dict

from arcredit.core.config import Settings
from arcredit.core.errors import BytesOracleUnavailable, FiatOracleUnavailable
from arcredit.models.units import Winston
from arcredit.services.http_client import HttpError, get_json

from .base import ArweaveToFiatOracle, BytesToWinstonOracle

logger = logging.getLogger("arcredit.oracles")

_STATIC_AR_PRICES: Dict[str, float] = {
    "usd": 10.0,
    "eur": 9.2,
    "gbp": 7.9,
    "cad": 13.6,
    "aud": 15.1,
    "jpy": 1_490.0,
    "inr": 830.0,
    "sgd": 13.4,
    "hkd": 78.1,
    "brl": 49.5,
}

# Placeholder storage price, roughly in line with mainnet quotes
_STATIC_WINSTON_PER_BYTE = 2_000


class StaticArweaveToFiatOracle(ArweaveToFiatOracle):
    def __init__(self, prices: Dict[str, float] | None = None):
        self._prices = dict(prices or _STATIC_AR_PRICES)

    async def get_fiat_price_for_one_ar(self, currency: str) -> float:  # type: ignore[override]
        try:
            return self._prices[currency.lower()]
        except KeyError as e:
            raise FiatOracleUnavailable(f"No static price for '{currency}'") from e


class CoingeckoArweaveToFiatOracle(ArweaveToFiatOracle):
    """Fetches the AR spot price from the CoinGecko simple price endpoint."""

    def __init__(self, api_url: str, timeout: float = 5.0, retries: int = 2):
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._retries = retries

    async def get_fiat_price_for_one_ar(self, currency: str) -> float:  # type: ignore[override]
        currency = currency.lower()
        url = f"{self._api_url}/simple/price?ids=arweave&vs_currencies={currency}"
        try:
            data = await asyncio.to_thread(
                get_json, url, timeout=self._timeout, retries=self._retries
            )
        except HttpError as e:
            raise FiatOracleUnavailable(str(e)) from e
        price = (data.get("arweave") or {}).get(currency) if isinstance(data, dict) else None
        if not isinstance(price, (int, float)) or isinstance(price, bool) or price <= 0:
            raise FiatOracleUnavailable(
                f"Unexpected CoinGecko response for '{currency}': {data!r}"
            )
        logger.debug(
            "fetched fiat price", extra={"context": {"currency": currency, "price": price}}
        )
        return float(price)


class StaticBytesToWinstonOracle(BytesToWinstonOracle):
    def __init__(self, winston_per_byte: int = _STATIC_WINSTON_PER_BYTE):
        self._winston_per_byte = winston_per_byte

    async def get_winston_for_bytes(self, byte_count: int) -> Winston:  # type: ignore[override]
        return Winston(byte_count * self._winston_per_byte)


class GatewayBytesToWinstonOracle(BytesToWinstonOracle):
    """Asks an Arweave gateway for the current price of storing N bytes."""

    def __init__(self, gateway_url: str, timeout: float = 5.0, retries: int = 2):
        self._gateway_url = gateway_url.rstrip("/")
        self._timeout = timeout
        self._retries = retries

    async def get_winston_for_bytes(self, byte_count: int) -> Winston:  # type: ignore[override]
        url = f"{self._gateway_url}/price/{byte_count}"
        try:
            data = await asyncio.to_thread(
                get_json, url, timeout=self._timeout, retries=self._retries
            )
        except HttpError as e:
            raise BytesOracleUnavailable(str(e)) from e
        if isinstance(data, bool) or not isinstance(data, (int, str)):
            raise BytesOracleUnavailable(f"Unexpected gateway price response: {data!r}")
        try:
            return Winston(data)
        except ValueError as e:
            raise BytesOracleUnavailable(f"Unexpected gateway price response: {data!r}") from e


_FIAT_ORACLE_REGISTRY: Dict[str, Callable[[Settings], ArweaveToFiatOracle]] = {
    "static": lambda s: StaticArweaveToFiatOracle(),
    "coingecko": lambda s: CoingeckoArweaveToFiatOracle(
        s.coingecko_api_url, timeout=s.http_timeout_seconds, retries=s.http_retries
    ),
}

_BYTES_ORACLE_REGISTRY: Dict[str, Callable[[Settings], BytesToWinstonOracle]] = {
    "static": lambda s: StaticBytesToWinstonOracle(),
    "gateway": lambda s: GatewayBytesToWinstonOracle(
        s.arweave_gateway_url, timeout=s.http_timeout_seconds, retries=s.http_retries
    ),
}


def make_fiat_oracle(kind: str, settings: Settings) -> ArweaveToFiatOracle:
    factory = _FIAT_ORACLE_REGISTRY.get(kind)
    if not factory:
        raise ValueError(f"Unknown fiat oracle kind '{kind}'")
    return factory(settings)


def make_bytes_oracle(kind: str, settings: Settings) -> BytesToWinstonOracle:
    factory = _BYTES_ORACLE_REGISTRY.get(kind)
    if not factory:
        raise ValueError(f"Unknown bytes oracle kind '{kind}'")
    return factory(settings)
