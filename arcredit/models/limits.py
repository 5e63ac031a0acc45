from __future__ import annotations

from typing import Dict, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import PAYMENT_AMOUNT_LIMITS

Amount = Union[int, float]


class CurrencyLimitation(BaseModel):
    """Payment bounds and suggested amounts for one currency (smallest unit)."""

    model_config = ConfigDict(frozen=True)

    minimum_payment_amount: Amount = Field(..., ge=0)
    maximum_payment_amount: Amount = Field(..., gt=0)
    suggested_payment_amounts: Tuple[Amount, Amount, Amount]

    @model_validator(mode="after")
    def min_not_above_max(self) -> "CurrencyLimitation":
        if self.minimum_payment_amount > self.maximum_payment_amount:
            raise ValueError("minimum_payment_amount exceeds maximum_payment_amount")
        return self

    def suggested_within_bounds(self) -> bool:
        return all(
            self.minimum_payment_amount <= v <= self.maximum_payment_amount
            for v in self.suggested_payment_amounts
        )


CurrencyLimitations = Dict[str, CurrencyLimitation]


def static_currency_limitations() -> CurrencyLimitations:
    return {
        currency: CurrencyLimitation(
            minimum_payment_amount=minimum,
            maximum_payment_amount=maximum,
            suggested_payment_amounts=suggested,
        )
        for currency, (minimum, maximum, suggested) in PAYMENT_AMOUNT_LIMITS.items()
    }
