from __future__ import annotations

"""Generic read-through cache over an async producer.

Purpose:
    Memoize expensive, failure-prone upstream lookups (fiat rates, byte price
    quotes) behind a bounded, optionally expiring cache.

Design:
    - Entries are either pending (holding the in-flight producer task) or
      resolved (holding the value and the time it was stored).
    - A miss stores the pending entry before the producer runs, so concurrent
      callers for the same key await one shared task instead of issuing a
      second upstream call.
    - Failures are never cached: the entry is dropped and the exception
      reaches every waiter; the next get() starts a fresh attempt.
    - Recency lives in an OrderedDict (hash map + doubly linked list); the LRU
      victim is the first resolved entry from the old end. Pending entries are
      never evicted.
    - TTL is checked lazily on access; there is no background sweep.

The cache holds no lock: all bookkeeping happens synchronously between
awaits on a single event loop.
"""

import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Hashable, Optional, TypeVar, Union

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

logger = logging.getLogger("arcredit.cache")


@dataclass
class _PendingEntry(Generic[V]):
    task: "asyncio.Task[V]"


@dataclass
class _ResolvedEntry(Generic[V]):
    value: V
    inserted_at: float


_Entry = Union[_PendingEntry, _ResolvedEntry]


class ReadThroughCache(Generic[K, V]):
    """Bounded LRU cache that computes missing values with ``read_through_function``.

    cache_capacity: maximum number of resolved entries kept (must be > 0).
    cache_ttl_ms: entry lifetime in milliseconds; None or 0 disables expiry.
    """

    def __init__(
        self,
        read_through_function: Callable[[K], Awaitable[V]],
        cache_capacity: int,
        cache_ttl_ms: Optional[int] = None,
        name: str = "cache",
    ):
        if isinstance(cache_capacity, bool) or not isinstance(cache_capacity, int):
            raise ValueError("cache_capacity must be an integer")
        if cache_capacity <= 0:
            raise ValueError("cache_capacity must be positive")
        if cache_ttl_ms is not None and cache_ttl_ms < 0:
            raise ValueError("cache_ttl_ms must not be negative")
        self._read_through = read_through_function
        self._capacity = cache_capacity
        self._ttl_seconds = cache_ttl_ms / 1000 if cache_ttl_ms else None
        self._entries: "OrderedDict[K, _Entry]" = OrderedDict()
        self._name = name

    # Internal --------------------------------------------------
    def _is_fresh(self, entry: _Entry) -> bool:
        # In-flight work is always joined so a key never has two producers
        if isinstance(entry, _PendingEntry) or self._ttl_seconds is None:
            return True
        return time.monotonic() - entry.inserted_at < self._ttl_seconds

    def _evict_over_capacity(self, keep: K) -> None:
        while len(self._entries) > self._capacity:
            victim = next(
                (
                    k
                    for k, e in self._entries.items()
                    if k != keep and isinstance(e, _ResolvedEntry)
                ),
                None,
            )
            if victim is None:
                return
            del self._entries[victim]
            logger.debug(
                "evicted least recently used entry",
                extra={"context": {"cache": self._name, "key": victim}},
            )

    def _owns(self, key: K, task: "asyncio.Task[V]") -> bool:
        entry = self._entries.get(key)
        return isinstance(entry, _PendingEntry) and entry.task is task

    async def _fetch(self, key: K) -> V:
        task = asyncio.current_task()
        try:
            value = await self._read_through(key)
        except BaseException:
            if self._owns(key, task):
                del self._entries[key]
            raise
        if self._owns(key, task):
            self._entries[key] = _ResolvedEntry(value=value, inserted_at=time.monotonic())
            self._evict_over_capacity(keep=key)
        return value

    def _start(self, key: K) -> _PendingEntry:
        # The task cannot run before the entry below is stored
        pending = _PendingEntry(task=asyncio.ensure_future(self._fetch(key)))
        self._entries[key] = pending
        self._entries.move_to_end(key)
        logger.debug("cache miss", extra={"context": {"cache": self._name, "key": key}})
        return pending

    # Public API -----------------------------------------------
    async def get(self, key: K) -> V:
        entry = self._entries.get(key)
        if entry is not None and self._is_fresh(entry):
            self._entries.move_to_end(key)
            if isinstance(entry, _ResolvedEntry):
                return entry.value
        else:
            if entry is not None:
                del self._entries[key]
            entry = self._start(key)
        # shield: one caller being cancelled must not cancel the shared task
        return await asyncio.shield(entry.task)

    def clear(self) -> None:
        """Drop resolved entries; in-flight work keeps running and still settles."""
        for key in [k for k, e in self._entries.items() if isinstance(e, _ResolvedEntry)]:
            del self._entries[key]

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key)  # type: ignore[arg-type]
        return entry is not None and self._is_fresh(entry)

    def __len__(self) -> int:
        return len(self._entries)
