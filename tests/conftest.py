"""Shared fixtures: in-memory oracles that count upstream calls."""

from __future__ import annotations

import asyncio
from typing import Dict, Iterable, List

import pytest

from arcredit.core.errors import BytesOracleUnavailable, FiatOracleUnavailable
from arcredit.models.units import Winston
from arcredit.services.oracles import ArweaveToFiatOracle, BytesToWinstonOracle


class FakeFiatOracle(ArweaveToFiatOracle):
    def __init__(
        self,
        prices: Dict[str, float],
        fail: bool = False,
        delay: float = 0.0,
        failing: Iterable[str] = (),
    ):
        self.prices = prices
        self.fail = fail
        self.failing = set(failing)
        self.delay = delay
        self.calls: List[str] = []

    async def get_fiat_price_for_one_ar(self, currency: str) -> float:
        self.calls.append(currency)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail or currency in self.failing:
            raise FiatOracleUnavailable("fiat upstream down")
        return self.prices[currency]


class FakeBytesOracle(BytesToWinstonOracle):
    def __init__(self, winston: int = 1000, fail: bool = False):
        self.winston = winston
        self.fail = fail
        self.calls: List[int] = []

    async def get_winston_for_bytes(self, byte_count: int) -> Winston:
        self.calls.append(byte_count)
        if self.fail:
            raise BytesOracleUnavailable("gateway down")
        return Winston(self.winston)


# Every supported currency priced equal to USD, except jpy (1 AR = 1500 yen
# when 1 AR = 10 USD) so the static table stays within ten percent.
STABLE_PRICES: Dict[str, float] = {
    "usd": 10.0,
    "eur": 10.0,
    "gbp": 10.0,
    "cad": 15.0,
    "aud": 15.0,
    "jpy": 1500.0,
    "inr": 800.0,
    "sgd": 15.0,
    "hkd": 80.0,
    "brl": 50.0,
}


@pytest.fixture
def stable_prices() -> Dict[str, float]:
    return dict(STABLE_PRICES)


@pytest.fixture
def fiat_oracle(stable_prices) -> FakeFiatOracle:
    return FakeFiatOracle(stable_prices)


@pytest.fixture
def bytes_oracle() -> FakeBytesOracle:
    return FakeBytesOracle()
