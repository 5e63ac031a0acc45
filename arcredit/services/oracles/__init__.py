from .base import ArweaveToFiatOracle, BytesToWinstonOracle
from .providers import (
    CoingeckoArweaveToFiatOracle,
    GatewayBytesToWinstonOracle,
    StaticArweaveToFiatOracle,
    StaticBytesToWinstonOracle,
    make_bytes_oracle,
    make_fiat_oracle,
)
from .read_through import ReadThroughArweaveToFiatOracle, ReadThroughBytesToWinstonOracle

__all__ = [
    "ArweaveToFiatOracle",
    "BytesToWinstonOracle",
    "CoingeckoArweaveToFiatOracle",
    "GatewayBytesToWinstonOracle",
    "StaticArweaveToFiatOracle",
    "StaticBytesToWinstonOracle",
    "make_bytes_oracle",
    "make_fiat_oracle",
    "ReadThroughArweaveToFiatOracle",
    "ReadThroughBytesToWinstonOracle",
]
