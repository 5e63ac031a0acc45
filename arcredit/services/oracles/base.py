from __future__ import annotations

"""Oracle abstractions.

An oracle answers one price question from an external source. Upstream
implementations may fail with ``OracleUnavailable``; read-through wrappers add
caching without changing the interface, so the pricing service accepts either.
"""
from abc import ABC, abstractmethod

from arcredit.models.units import Winston


class ArweaveToFiatOracle(ABC):
    @abstractmethod
    async def get_fiat_price_for_one_ar(self, currency: str) -> float:
        """Return the price of 1 AR in whole units of ``currency``."""
        raise NotImplementedError


class BytesToWinstonOracle(ABC):
    @abstractmethod
    async def get_winston_for_bytes(self, byte_count: int) -> Winston:
        """Return the cost in winc of storing ``byte_count`` bytes."""
        raise NotImplementedError
