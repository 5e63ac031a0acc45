"""Domain constants for pricing and payment validation.

Payment amounts are expressed in the smallest unit of each currency (cents for
usd, whole yen for jpy), matching what the payment provider accepts.
"""

from typing import Dict, Final, FrozenSet, Tuple

SUPPORTED_PAYMENT_CURRENCIES: Tuple[str, ...] = (
    "usd",
    "eur",
    "gbp",
    "cad",
    "aud",
    "jpy",
    "inr",
    "sgd",
    "hkd",
    "brl",
)

# Currencies whose smallest unit is a whole unit (no cents)
ZERO_DECIMAL_CURRENCIES: FrozenSet[str] = frozenset({"jpy"})

# Static limits per currency: (minimum, maximum, suggested amounts).
# Dynamic limits fall back to these when within ten percent of them.
PAYMENT_AMOUNT_LIMITS: Dict[str, Tuple[int, int, Tuple[int, int, int]]] = {
    "usd": (500, 1_000_000, (2_500, 5_000, 10_000)),
    "eur": (500, 1_000_000, (2_500, 5_000, 10_000)),
    "gbp": (500, 1_000_000, (2_000, 4_000, 8_000)),
    "cad": (750, 1_500_000, (2_500, 5_000, 10_000)),
    "aud": (750, 1_500_000, (2_500, 5_000, 10_000)),
    "jpy": (750, 1_500_000, (2_500, 5_000, 10_000)),
    "inr": (40_000, 80_000_000, (150_000, 200_000, 500_000)),
    "sgd": (750, 1_500_000, (2_500, 5_000, 10_000)),
    "hkd": (4_000, 8_000_000, (20_000, 40_000, 80_000)),
    "brl": (2_500, 5_000_000, (12_500, 25_000, 50_000)),
}

WINSTON_PER_AR: Final[int] = 10**12
MAX_AR_DECIMAL_PLACES: Final[int] = 12

# Largest integer a JSON client can represent exactly (2^53 - 1)
MAX_SAFE_INTEGER: Final[int] = 9_007_199_254_740_991

# Storage is billed in 256 KiB chunks
ARWEAVE_CHUNK_SIZE: Final[int] = 256 * 1024
ONE_GIB_IN_BYTES: Final[int] = 1024**3

# Payment provider accepts at most 8 integer digits per amount
MAX_PROVIDER_DIGITS: Final[int] = 8
# Rounded stand-in for the provider's real maximum of 99_999_999
MAX_PROVIDER_AMOUNT: Final[int] = 99_000_000

SUBSIDY_ADJUSTMENT_NAME: Final[str] = "Upload Subsidy"
