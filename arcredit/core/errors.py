"""Error taxonomy and FastAPI exception handlers.

Three families:
    - malformed input (``InvalidDataError`` and subclasses), raised at
      construction time and never cached;
    - payment limit violations (``PaymentAmountOutOfRange``), carrying the
      offending amount and the violated bound;
    - upstream failures (``OracleUnavailable``), raised by oracles and passed
      through the read-through caches untouched.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("arcredit.errors")


class InvalidDataError(ValueError):
    """Raised when an amount or identifier cannot be parsed."""


class UnsupportedCurrencyType(InvalidDataError):
    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(
            f"The currency type '{currency}' is currently not supported by this API!"
        )


class InvalidPaymentAmount(InvalidDataError):
    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(
            f"The provided payment amount ({amount}) is invalid; it must be a positive non-decimal integer!"
        )


class InvalidByteCount(InvalidDataError):
    reason = "Invalid byte count"

    def __init__(self, byte_count: object):
        self.byte_count = byte_count
        super().__init__(f"{self.reason}: {byte_count}")


class ByteCountTooLarge(InvalidByteCount):
    reason = "Byte count too large"


class PaymentAmountOutOfRange(Exception):
    """Payment amount outside the currency-specific limits."""

    kind = "out_of_range"

    def __init__(self, amount: int, currency: str, bound: int | float):
        self.amount = amount
        self.currency = currency
        self.bound = bound
        super().__init__(self._message())

    def _message(self) -> str:
        return f"Payment amount {self.amount} {self.currency} is out of range"


class PaymentAmountTooSmall(PaymentAmountOutOfRange):
    kind = "too_small"

    def _message(self) -> str:
        return (
            f"The provided payment amount ({self.amount}) is too small for the "
            f"currency type '{self.currency}'; it must be above {self.bound}!"
        )


class PaymentAmountTooLarge(PaymentAmountOutOfRange):
    kind = "too_large"

    def _message(self) -> str:
        return (
            f"The provided payment amount ({self.amount}) is too large for the "
            f"currency type '{self.currency}'; it must be below or equal to {self.bound}!"
        )


class OracleUnavailable(Exception):
    """An upstream price source could not produce a value."""

    detail = "Pricing Oracle Unavailable"


class FiatOracleUnavailable(OracleUnavailable):
    detail = "Fiat Oracle Unavailable"


class BytesOracleUnavailable(OracleUnavailable):
    detail = "Pricing Oracle Unavailable"


# Handlers --------------------------------------------------


def http_exception_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    if exc.status_code != status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "http_error", "detail": exc.detail},
        )
    # Starlette's generic detail means no route matched
    detail = exc.detail
    if detail == "Not Found":
        detail = f"No route for {request.method} {request.url.path}"
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "not_found", "detail": detail},
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": exc.errors(),
        },
    )


def invalid_data_handler(request: Request, exc: InvalidDataError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "invalid_data", "detail": str(exc)},
    )


def payment_out_of_range_handler(request: Request, exc: PaymentAmountOutOfRange):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": f"payment_amount_{exc.kind}",
            "detail": str(exc),
            "amount": exc.amount,
            "bound": exc.bound,
        },
    )


def oracle_unavailable_handler(request: Request, exc: OracleUnavailable):  # type: ignore
    logger.warning(
        "upstream oracle unavailable",
        extra={"context": {"path": request.url.path, "reason": str(exc)}},
    )
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": "bad_gateway", "detail": exc.detail},
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
