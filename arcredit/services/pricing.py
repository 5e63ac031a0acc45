"""Pricing service.

Turns oracle quotes into credit amounts:
    - bytes -> winc, minus the configured upload subsidy;
    - fiat payment -> winc, minus the configured fee;
    - per-currency payment limits derived from the USD limits at the current
      exchange rates, snapped to two significant figures and pinned to the
      static table whenever the live value is within ten percent of it.

Every oracle call goes through the read-through caches, so a burst of requests
costs at most one upstream fetch per currency or chunk size.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, FrozenSet, List, Literal, Tuple

from arcredit.core.config import Settings
from arcredit.models.constants import (
    MAX_PROVIDER_AMOUNT,
    MAX_PROVIDER_DIGITS,
    ONE_GIB_IN_BYTES,
    SUBSIDY_ADJUSTMENT_NAME,
    SUPPORTED_PAYMENT_CURRENCIES,
    ZERO_DECIMAL_CURRENCIES,
)
from arcredit.models.limits import (
    CurrencyLimitation,
    CurrencyLimitations,
    static_currency_limitations,
)
from arcredit.models.units import Winston
from arcredit.services.chunks import round_to_chunk_size
from arcredit.services.money import (
    as_number,
    ceil_two_significant_figures,
    count_integer_digits,
    floor_two_significant_figures,
    round_two_significant_figures,
    to_decimal,
)
from arcredit.services.oracles import (
    ArweaveToFiatOracle,
    BytesToWinstonOracle,
    ReadThroughArweaveToFiatOracle,
    ReadThroughBytesToWinstonOracle,
    make_bytes_oracle,
    make_fiat_oracle,
)
from arcredit.services.payment import Payment

logger = logging.getLogger("arcredit.pricing")


@dataclass(frozen=True)
class Adjustment:
    name: str
    description: str
    operator: Literal["multiply"]
    value: float
    adjustment_amount: Winston

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "operator": self.operator,
            "value": self.value,
            "adjustment_amount": str(self.adjustment_amount),
        }


@dataclass(frozen=True)
class WincForBytesResponse:
    winc: Winston
    adjustments: List[Adjustment]


@dataclass(frozen=True)
class RatesResponse:
    winc: Winston
    fiat: Dict[str, float]
    adjustments: List[Adjustment]


@dataclass(frozen=True)
class PricingConfig:
    subsidized_winc_percentage: float = 0.0
    fee_percentage: float = 23.4
    payment_amount_limits: CurrencyLimitations = field(
        default_factory=static_currency_limitations
    )
    zero_decimal_currencies: FrozenSet[str] = ZERO_DECIMAL_CURRENCIES

    @property
    def fee_as_decimal(self) -> float:
        return self.fee_percentage / 100

    @property
    def subsidy_as_decimal(self) -> float:
        return self.subsidized_winc_percentage / 100

    @classmethod
    def from_settings(cls, settings: Settings) -> "PricingConfig":
        return cls(
            subsidized_winc_percentage=settings.subsidized_winc_percentage,
            fee_percentage=settings.turbo_fee_percentage,
        )


def _is_within_ten_percent(value: float | Decimal, target: float | Decimal) -> bool:
    target_dec = to_decimal(target)
    difference = abs(to_decimal(value) - target_dec) / target_dec * 100
    return difference <= 10


def _is_within_provider_maximum(amount: float | Decimal) -> bool:
    return count_integer_digits(amount) <= MAX_PROVIDER_DIGITS


class TurboPricingService:
    def __init__(
        self,
        bytes_to_winston_oracle: BytesToWinstonOracle,
        arweave_to_fiat_oracle: ArweaveToFiatOracle,
        config: PricingConfig | None = None,
    ):
        self._bytes_oracle = bytes_to_winston_oracle
        self._fiat_oracle = arweave_to_fiat_oracle
        self.config = config or PricingConfig()

    @classmethod
    def from_settings(cls, settings: Settings) -> "TurboPricingService":
        """Wire the configured upstream oracles behind read-through caches."""
        return cls(
            bytes_to_winston_oracle=ReadThroughBytesToWinstonOracle(
                make_bytes_oracle(settings.bytes_oracle_kind, settings),
                cache_ttl_ms=settings.bytes_cache_ttl_ms,
                cache_capacity=settings.bytes_cache_capacity,
            ),
            arweave_to_fiat_oracle=ReadThroughArweaveToFiatOracle(
                make_fiat_oracle(settings.fiat_oracle_kind, settings),
                cache_ttl_ms=settings.fiat_cache_ttl_ms,
            ),
            config=PricingConfig.from_settings(settings),
        )

    # Rates ----------------------------------------------------
    async def get_fiat_price_for_one_ar(self, currency: str) -> float:
        return await self._fiat_oracle.get_fiat_price_for_one_ar(currency)

    async def get_wc_for_bytes(self, byte_count: int) -> WincForBytesResponse:
        chunk_size = round_to_chunk_size(byte_count)
        winston = await self._bytes_oracle.get_winston_for_bytes(chunk_size)

        multiplier = self.config.subsidy_as_decimal
        adjustment_amount = winston * multiplier

        adjustments = [
            Adjustment(
                name=SUBSIDY_ADJUSTMENT_NAME,
                description=f"A {self.config.subsidized_winc_percentage:g}% discount on uploads",
                operator="multiply",
                value=multiplier,
                # Deducted from the charge, so recorded as a negative delta
                adjustment_amount=-adjustment_amount,
            )
        ]
        logger.info(
            "Calculated adjustments for bytes.",
            extra={
                "context": {
                    "bytes": byte_count,
                    "chunk_size": chunk_size,
                    "original_amount": str(winston),
                    "adjustments": [a.to_dict() for a in adjustments],
                }
            },
        )
        return WincForBytesResponse(winc=winston - adjustment_amount, adjustments=adjustments)

    async def get_wc_for_payment(self, payment: Payment) -> Winston:
        fiat_price_of_one_ar = await self._fiat_oracle.get_fiat_price_for_one_ar(payment.type)
        return payment.winston_credit_amount_for_ar_price(
            fiat_price_of_one_ar,
            self.config.fee_as_decimal,
            self.config.zero_decimal_currencies,
        )

    async def get_rates(self) -> RatesResponse:
        """Price of one GiB in winc plus its gross fiat cost in every currency."""
        price = await self.get_wc_for_bytes(ONE_GIB_IN_BYTES)
        ar_amount = price.winc.to_ar().value
        gross_up = 1 - to_decimal(self.config.fee_as_decimal)

        async def fiat_for(currency: str) -> Tuple[str, float]:
            rate = await self.get_fiat_price_for_one_ar(currency)
            return currency, float(to_decimal(rate) * ar_amount / gross_up)

        fiat = dict(
            await asyncio.gather(*(fiat_for(c) for c in SUPPORTED_PAYMENT_CURRENCIES))
        )
        return RatesResponse(winc=price.winc, fiat=fiat, adjustments=price.adjustments)

    # Limits ---------------------------------------------------
    async def _get_dynamic_currency_limitation(
        self,
        currency: str,
        static: CurrencyLimitation,
        usd_price_of_one_ar: float,
    ) -> CurrencyLimitation:
        currency_price_of_one_ar = await self._fiat_oracle.get_fiat_price_for_one_ar(currency)

        usd_price = to_decimal(usd_price_of_one_ar)
        if currency in self.config.zero_decimal_currencies:
            # USD limits are in cents; zero-decimal targets are in whole units
            usd_price = usd_price * 100

        def convert_from_usd_limit(amount: float) -> Decimal:
            return to_decimal(amount) / usd_price * to_decimal(currency_price_of_one_ar)

        usd_limits = self.config.payment_amount_limits["usd"]
        dynamic_minimum = ceil_two_significant_figures(
            convert_from_usd_limit(usd_limits.minimum_payment_amount)
        )
        dynamic_maximum = floor_two_significant_figures(
            convert_from_usd_limit(usd_limits.maximum_payment_amount)
        )

        if _is_within_ten_percent(dynamic_minimum, static.minimum_payment_amount):
            minimum = static.minimum_payment_amount
        else:
            minimum = as_number(dynamic_minimum)

        if _is_within_ten_percent(dynamic_maximum, static.maximum_payment_amount):
            maximum = static.maximum_payment_amount
        elif _is_within_provider_maximum(dynamic_maximum):
            maximum = as_number(dynamic_maximum)
        else:
            maximum = MAX_PROVIDER_AMOUNT

        minimum_dec = to_decimal(minimum)
        dynamic_suggested = (
            minimum,
            as_number(round_two_significant_figures(minimum_dec * 2)),
            as_number(round_two_significant_figures(minimum_dec * 4)),
        )
        limitation = CurrencyLimitation(
            minimum_payment_amount=minimum,
            maximum_payment_amount=maximum,
            suggested_payment_amounts=static.suggested_payment_amounts,
        )
        if not limitation.suggested_within_bounds():
            limitation = limitation.model_copy(
                update={"suggested_payment_amounts": dynamic_suggested}
            )

        logger.info(
            "Successfully fetched dynamic prices for supported currencies",
            extra={
                "context": {
                    "currency": currency,
                    "dynamic_minimum": as_number(dynamic_minimum),
                    "dynamic_maximum": as_number(dynamic_maximum),
                    "dynamic_suggested": dynamic_suggested,
                }
            },
        )
        return limitation

    async def get_currency_limitations(self) -> CurrencyLimitations:
        usd_price_of_one_ar = await self._fiat_oracle.get_fiat_price_for_one_ar("usd")
        currencies = [
            c for c in SUPPORTED_PAYMENT_CURRENCIES if c in self.config.payment_amount_limits
        ]
        results = await asyncio.gather(
            *(
                self._get_dynamic_currency_limitation(
                    currency, self.config.payment_amount_limits[currency], usd_price_of_one_ar
                )
                for currency in currencies
            )
        )
        return dict(zip(currencies, results))
