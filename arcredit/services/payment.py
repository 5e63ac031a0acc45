"""Validated fiat payment.

A Payment is always in the smallest unit of its currency. Construction fails
fast with a typed error so routers can map each case to a response without
inspecting messages.
"""

from __future__ import annotations

import re
from decimal import Decimal, localcontext
from typing import Iterable, Optional

from arcredit.core.errors import (
    InvalidPaymentAmount,
    PaymentAmountTooLarge,
    PaymentAmountTooSmall,
    UnsupportedCurrencyType,
)
from arcredit.models.constants import (
    MAX_SAFE_INTEGER,
    SUPPORTED_PAYMENT_CURRENCIES,
    WINSTON_PER_AR,
    ZERO_DECIMAL_CURRENCIES,
)
from arcredit.models.limits import CurrencyLimitations
from arcredit.models.units import Winston
from arcredit.services.money import DECIMAL_PRECISION, round_half_up, to_decimal

_INTEGER_AMOUNT = re.compile(r"^-?[0-9]+$")


def _parse_amount(amount: object) -> int:
    if isinstance(amount, bool):
        raise InvalidPaymentAmount(amount)
    if isinstance(amount, int):
        return amount
    if isinstance(amount, float):
        if amount.is_integer():
            return int(amount)
        raise InvalidPaymentAmount(amount)
    if isinstance(amount, str) and _INTEGER_AMOUNT.match(amount.strip()):
        return int(amount.strip())
    raise InvalidPaymentAmount(amount)


class Payment:
    def __init__(
        self,
        amount: int | float | str,
        type: str,
        currency_limitations: Optional[CurrencyLimitations] = None,
    ):
        currency = type.lower()
        if currency not in SUPPORTED_PAYMENT_CURRENCIES:
            raise UnsupportedCurrencyType(currency)

        value = _parse_amount(amount)
        if value < 0 or value > MAX_SAFE_INTEGER:
            raise InvalidPaymentAmount(amount)

        if currency_limitations is not None:
            limitation = currency_limitations[currency]
            if value > limitation.maximum_payment_amount:
                raise PaymentAmountTooLarge(
                    value, currency, limitation.maximum_payment_amount
                )
            if value < limitation.minimum_payment_amount:
                raise PaymentAmountTooSmall(
                    value, currency, limitation.minimum_payment_amount
                )

        self.amount: int = value
        self.type: str = currency

    def __repr__(self) -> str:
        return f"Payment(amount={self.amount}, type='{self.type}')"

    def winston_credit_amount_for_ar_price(
        self,
        price_for_one_ar: float,
        fee_percentage_as_decimal: float,
        zero_decimal_currencies: Iterable[str] = ZERO_DECIMAL_CURRENCIES,
    ) -> Winston:
        """Credits bought by this payment at the given AR price, after fees."""
        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            whole_units = Decimal(self.amount)
            if self.type not in zero_decimal_currencies:
                whole_units = whole_units / 100
            after_fees = whole_units * (1 - to_decimal(fee_percentage_as_decimal))
            ar_amount = after_fees / to_decimal(price_for_one_ar)
            return Winston(round_half_up(ar_amount * WINSTON_PER_AR))
