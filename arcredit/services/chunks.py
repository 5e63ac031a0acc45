"""Byte count parsing and chunk rounding.

Storage is billed per chunk, so byte counts are rounded up to a whole number
of chunks before they reach the bytes oracle. Rounding up front also keeps the
bytes oracle cache small: every count inside one chunk shares a cache key.
"""

from __future__ import annotations

import re

from arcredit.core.errors import ByteCountTooLarge, InvalidByteCount
from arcredit.models.constants import ARWEAVE_CHUNK_SIZE, MAX_SAFE_INTEGER

_BYTE_COUNT = re.compile(r"^[0-9]+$")


def parse_byte_count(raw: str | int) -> int:
    if isinstance(raw, bool):
        raise InvalidByteCount(raw)
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not _BYTE_COUNT.match(text):
            raise InvalidByteCount(raw)
        value = int(text)
    if value < 0:
        raise InvalidByteCount(raw)
    if value > MAX_SAFE_INTEGER:
        raise ByteCountTooLarge(raw)
    return value


def round_to_chunk_size(byte_count: int, chunk_size: int = ARWEAVE_CHUNK_SIZE) -> int:
    if byte_count % chunk_size == 0:
        return byte_count
    return (byte_count // chunk_size + 1) * chunk_size
