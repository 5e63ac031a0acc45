"""AR / Winston amount types.

AR is the human-facing token amount (decimal, at most 12 fractional digits).
Winston Credits are the integer micro-unit used for all accounting:
1 AR == 10**12 winc. Neither type ever goes through binary floating point.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from functools import total_ordering
from typing import Union

from arcredit.core.errors import InvalidDataError
from arcredit.models.constants import MAX_AR_DECIMAL_PLACES, WINSTON_PER_AR
from arcredit.services.money import DECIMAL_PRECISION, Number, round_half_up, to_decimal

_DECIMAL_NUMERAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")
_INTEGER_NUMERAL = re.compile(r"^[+-]?\d+$")


def _normalize(value: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return value.normalize()


def _fractional_digits(value: Decimal) -> int:
    exponent = _normalize(value).as_tuple().exponent
    return max(0, -exponent)  # type: ignore[operator]


class AR:
    """Immutable AR token amount."""

    __slots__ = ("_value",)

    def __init__(self, value: Decimal):
        self._value = value

    @classmethod
    def from_value(cls, value: Union[Number, str]) -> "AR":
        if isinstance(value, bool):
            raise InvalidDataError(f"AR amount must be numeric, got {value!r}")
        if isinstance(value, str):
            text = value.strip()
            if not _DECIMAL_NUMERAL.match(text):
                raise InvalidDataError(f"Invalid AR amount: {value!r}")
            with localcontext() as ctx:
                ctx.prec = DECIMAL_PRECISION
                parsed = Decimal(text)
        elif isinstance(value, (int, float, Decimal)):
            if isinstance(value, float) and not math.isfinite(value):
                raise InvalidDataError(f"Invalid AR amount: {value!r}")
            try:
                parsed = to_decimal(value)
            except InvalidOperation as e:
                raise InvalidDataError(f"Invalid AR amount: {value!r}") from e
            if not parsed.is_finite():
                raise InvalidDataError(f"Invalid AR amount: {value!r}")
        else:
            raise InvalidDataError(f"AR amount must be numeric, got {type(value).__name__}")

        if _fractional_digits(parsed) > MAX_AR_DECIMAL_PLACES:
            raise InvalidDataError(
                f"AR amount {value!r} has more than {MAX_AR_DECIMAL_PLACES} decimal places"
            )
        if parsed.is_zero():
            parsed = Decimal(0)
        return cls(parsed)

    @property
    def value(self) -> Decimal:
        return self._value

    def to_winston(self) -> "Winston":
        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            scaled = (self._value * WINSTON_PER_AR).to_integral_value(rounding=ROUND_DOWN)
        return Winston(int(scaled))

    def value_of(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return format(_normalize(self._value), "f")

    def __repr__(self) -> str:
        return f"AR('{self}')"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AR):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)


@total_ordering
class Winston:
    """Whole-number Winston Credit amount."""

    __slots__ = ("_value",)

    def __init__(self, value: Union["Winston", Number, str]):
        self._value = self._coerce(value)

    @staticmethod
    def _coerce(value: Union["Winston", Number, str]) -> int:
        if isinstance(value, Winston):
            return value._value
        if isinstance(value, bool):
            raise InvalidDataError(f"Winston amount must be numeric, got {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            text = value.strip()
            if not _INTEGER_NUMERAL.match(text):
                raise InvalidDataError(f"Invalid Winston amount: {value!r}")
            return int(text)
        if isinstance(value, (float, Decimal)):
            if isinstance(value, float) and not math.isfinite(value):
                raise InvalidDataError(f"Invalid Winston amount: {value!r}")
            dec = to_decimal(value)
            if not dec.is_finite() or dec != dec.to_integral_value():
                raise InvalidDataError(
                    f"Winston amount must be a whole number, got {value!r}"
                )
            return int(dec)
        raise InvalidDataError(
            f"Winston amount must be numeric, got {type(value).__name__}"
        )

    # Arithmetic ------------------------------------------------
    def __add__(self, other: Union["Winston", Number]) -> "Winston":
        return Winston(self._value + self._coerce(other))

    __radd__ = __add__

    def __sub__(self, other: Union["Winston", Number]) -> "Winston":
        return Winston(self._value - self._coerce(other))

    def __rsub__(self, other: Union["Winston", Number]) -> "Winston":
        return Winston(self._coerce(other) - self._value)

    def __mul__(self, other: Union["Winston", Number]) -> "Winston":
        if isinstance(other, Winston):
            return Winston(self._value * other._value)
        if isinstance(other, bool) or not isinstance(other, (int, float, Decimal)):
            return NotImplemented
        if isinstance(other, int):
            return Winston(self._value * other)
        # Credits are indivisible: fractional products round to the nearest credit
        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            product = Decimal(self._value) * to_decimal(other)
        return Winston(round_half_up(product))

    __rmul__ = __mul__

    def __neg__(self) -> "Winston":
        return Winston(-self._value)

    def __abs__(self) -> "Winston":
        return Winston(abs(self._value))

    # Comparison ------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if isinstance(other, Winston):
            return self._value == other._value
        if isinstance(other, (int, float, Decimal)) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: Union["Winston", Number]) -> bool:
        if isinstance(other, Winston):
            return self._value < other._value
        if isinstance(other, (int, float, Decimal)) and not isinstance(other, bool):
            return self._value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    # Conversion ------------------------------------------------
    def __int__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Winston({self._value})"

    def to_ar(self) -> AR:
        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            return AR(Decimal(self._value) / WINSTON_PER_AR)
