"""Money / rounding helpers.

Centralized so the amount types, payment conversion and dynamic limits use
identical rounding semantics. All arithmetic runs in ``Decimal`` under a wide
local context so whole-credit amounts never lose digits.
"""

from __future__ import annotations

from decimal import (
    ROUND_CEILING,
    ROUND_FLOOR,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    Decimal,
    localcontext,
)
from typing import Union

Number = Union[int, float, Decimal]

DECIMAL_PRECISION = 80


def to_decimal(value: Number) -> Decimal:
    """Exact decimal for ints/Decimals, shortest round-trip form for floats."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_half_up(value: Number) -> int:
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return int(to_decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def count_integer_digits(value: Number) -> int:
    """Length of the value rounded to an integer, e.g. 499.6 -> 3."""
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        whole = to_decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return len(format(whole, "f"))


def two_significant_figure_multiplier(value: Number) -> Decimal:
    return Decimal(10) ** (count_integer_digits(value) - 2)


def _round_to_two_significant_figures(value: Number, rounding: str) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        multiplier = two_significant_figure_multiplier(value)
        scaled = (to_decimal(value) / multiplier).to_integral_value(rounding=rounding)
        return scaled * multiplier


def ceil_two_significant_figures(value: Number) -> Decimal:
    return _round_to_two_significant_figures(value, ROUND_CEILING)


def floor_two_significant_figures(value: Number) -> Decimal:
    return _round_to_two_significant_figures(value, ROUND_FLOOR)


def round_two_significant_figures(value: Number) -> Decimal:
    # Same tie-breaking as the builtin round(): half to even
    return _round_to_two_significant_figures(value, ROUND_HALF_EVEN)


def as_number(value: Decimal) -> Union[int, float]:
    """Plain JSON-friendly number: int when whole, float otherwise."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)
