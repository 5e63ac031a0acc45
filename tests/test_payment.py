"""
Tests for Payment validation and payment -> winc conversion.
"""

import pytest

from arcredit.core.errors import (
    InvalidPaymentAmount,
    PaymentAmountTooLarge,
    PaymentAmountTooSmall,
    UnsupportedCurrencyType,
)
from arcredit.models.constants import MAX_SAFE_INTEGER
from arcredit.models.limits import static_currency_limitations
from arcredit.models.units import Winston
from arcredit.services.payment import Payment


class TestPaymentValidation:
    """Construction-time checks"""

    def test_normalizes_currency(self) -> None:
        payment = Payment(amount=100, type="USD")
        assert payment.type == "usd"
        assert payment.amount == 100

    def test_accepts_string_amounts(self) -> None:
        assert Payment(amount="2500", type="eur").amount == 2500

    def test_unsupported_currency(self) -> None:
        with pytest.raises(UnsupportedCurrencyType) as exc_info:
            Payment(amount=100, type="RandomCurrency")
        assert "'randomcurrency'" in str(exc_info.value)

    @pytest.mark.parametrize(
        "amount", ["200.5", 200.5, -984, "-984", "abc", "", MAX_SAFE_INTEGER + 1, True]
    )
    def test_invalid_amounts(self, amount) -> None:
        with pytest.raises(InvalidPaymentAmount):
            Payment(amount=amount, type="usd")

    def test_zero_and_max_safe_integer_are_valid(self) -> None:
        Payment(amount=0, type="usd")
        Payment(amount=MAX_SAFE_INTEGER, type="usd")

    def test_too_large_carries_bound(self) -> None:
        limits = static_currency_limitations()
        with pytest.raises(PaymentAmountTooLarge) as exc_info:
            Payment(amount=1_000_001, type="usd", currency_limitations=limits)
        assert exc_info.value.amount == 1_000_001
        assert exc_info.value.bound == 1_000_000
        assert exc_info.value.currency == "usd"

    def test_too_small_carries_bound(self) -> None:
        limits = static_currency_limitations()
        with pytest.raises(PaymentAmountTooSmall) as exc_info:
            Payment(amount=499, type="usd", currency_limitations=limits)
        assert exc_info.value.bound == 500

    def test_bounds_are_inclusive(self) -> None:
        limits = static_currency_limitations()
        Payment(amount=500, type="usd", currency_limitations=limits)
        Payment(amount=1_000_000, type="usd", currency_limitations=limits)


class TestWinstonForPayment:
    """Fiat -> winc conversion"""

    def test_cents_currency_without_fee(self) -> None:
        # $10.00 at $10 per AR buys exactly one AR
        payment = Payment(amount=1000, type="usd")
        assert payment.winston_credit_amount_for_ar_price(10.0, 0) == Winston(10**12)

    def test_fee_is_deducted(self) -> None:
        payment = Payment(amount=1000, type="usd")
        winc = payment.winston_credit_amount_for_ar_price(10.0, 0.234)
        assert winc == Winston(766_000_000_000)

    def test_zero_decimal_currency_is_not_divided(self) -> None:
        payment = Payment(amount=1500, type="jpy")
        assert payment.winston_credit_amount_for_ar_price(1500.0, 0) == Winston(10**12)

    def test_result_is_whole_credits(self) -> None:
        payment = Payment(amount=100, type="usd")
        winc = payment.winston_credit_amount_for_ar_price(3.0, 0)
        # 1/3 AR rounded half up to the nearest winc
        assert winc == Winston(333_333_333_333)
