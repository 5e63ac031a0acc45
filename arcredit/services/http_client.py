from __future__ import annotations

"""Blocking JSON GET for the upstream price oracles.

Oracles call ``get_json`` through ``asyncio.to_thread`` and translate
``HttpError`` into their own unavailable error. Transport failures and 5xx /
429 answers are retried with exponential backoff; other 4xx answers and bodies
that are not JSON fail on the first attempt, since asking again returns the
same thing.
"""
import json
import logging
import time
import urllib.error
import urllib.request
from typing import Any, Optional

logger = logging.getLogger("arcredit.http")

_RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class HttpError(Exception):
    def __init__(self, message: str, *, url: str, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status

    @property
    def retryable(self) -> bool:
        return self.status is None or self.status in _RETRYABLE_STATUS


def _fetch_once(url: str, timeout: float) -> Any:
    request = urllib.request.Request(url, headers={"Accept": "application/json"})
    try:
        with urllib.request.urlopen(request, timeout=timeout) as resp:  # nosec B310
            body = resp.read()
    except urllib.error.HTTPError as e:
        raise HttpError(f"HTTP {e.code} for {url}", url=url, status=e.code) from e
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        raise HttpError(f"request to {url} failed: {e}", url=url) from e
    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        # 200 with a body we cannot read: not worth a retry
        raise HttpError(f"invalid JSON from {url}", url=url, status=200) from e


def get_json(
    url: str, *, timeout: float = 5.0, retries: int = 2, backoff: float = 0.5
) -> Any:
    attempt = 0
    while True:
        try:
            return _fetch_once(url, timeout)
        except HttpError as e:
            attempt += 1
            logger.warning(
                "upstream request failed",
                extra={
                    "context": {
                        "url": url,
                        "attempt": attempt,
                        "status": e.status,
                        "error": str(e),
                    }
                },
            )
            if not e.retryable or attempt > retries:
                raise
            time.sleep(backoff * (2 ** (attempt - 1)))
