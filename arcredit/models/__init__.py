"""Domain models and constants for AR credit pricing."""

from .constants import (
    SUPPORTED_PAYMENT_CURRENCIES,
    ZERO_DECIMAL_CURRENCIES,
    PAYMENT_AMOUNT_LIMITS,
    WINSTON_PER_AR,
)  # re-export
from .limits import CurrencyLimitation, CurrencyLimitations, static_currency_limitations
from .units import AR, Winston

__all__ = [
    "SUPPORTED_PAYMENT_CURRENCIES",
    "ZERO_DECIMAL_CURRENCIES",
    "PAYMENT_AMOUNT_LIMITS",
    "WINSTON_PER_AR",
    "CurrencyLimitation",
    "CurrencyLimitations",
    "static_currency_limitations",
    "AR",
    "Winston",
]
