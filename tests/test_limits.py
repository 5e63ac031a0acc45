"""Tests for the CurrencyLimitation model."""

import pytest
from pydantic import ValidationError

from arcredit.models.limits import CurrencyLimitation, static_currency_limitations


def make_limitation(minimum, maximum, suggested) -> CurrencyLimitation:
    return CurrencyLimitation(
        minimum_payment_amount=minimum,
        maximum_payment_amount=maximum,
        suggested_payment_amounts=suggested,
    )


class TestSuggestedWithinBounds:
    def test_static_table_is_consistent(self) -> None:
        for currency, limitation in static_currency_limitations().items():
            assert limitation.suggested_within_bounds(), currency

    def test_bounds_are_inclusive(self) -> None:
        assert make_limitation(500, 2_000, (500, 1_000, 2_000)).suggested_within_bounds()

    def test_below_minimum(self) -> None:
        limitation = make_limitation(1_100, 2_100_000, (1_000, 5_000, 10_000))
        assert not limitation.suggested_within_bounds()

    def test_above_maximum(self) -> None:
        assert not make_limitation(500, 8_000, (2_500, 5_000, 10_000)).suggested_within_bounds()


class TestValidation:
    def test_minimum_above_maximum_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_limitation(2_000, 1_000, (1_000, 1_500, 2_000))

    def test_frozen(self) -> None:
        limitation = make_limitation(500, 1_000, (500, 600, 700))
        with pytest.raises(ValidationError):
            limitation.minimum_payment_amount = 1
