from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from arcredit.services.chunks import parse_byte_count
from arcredit.services.payment import Payment
from arcredit.services.pricing import TurboPricingService

from .deps import get_pricing_service

"""Price router.

Endpoints:
    - GET /v1/price/bytes/{byte_count}       -> winc owed for storing N bytes
    - GET /v1/price/{currency}/{amount}      -> winc granted for a fiat payment

Inputs arrive as raw path strings and are validated by the domain types, so
malformed values surface as 400s with the domain error message.
"""

router = APIRouter(prefix="/v1/price", tags=["price"])


@router.get("/bytes/{byte_count}", summary="Winston credits owed for a byte count")
async def price_for_bytes(
    byte_count: str = Path(..., description="Number of bytes to upload"),
    svc: TurboPricingService = Depends(get_pricing_service),
):
    parsed = parse_byte_count(byte_count)
    result = await svc.get_wc_for_bytes(parsed)
    return {
        "winc": str(result.winc),
        "adjustments": [a.to_dict() for a in result.adjustments],
    }


@router.get("/{currency}/{amount}", summary="Winston credits granted for a fiat payment")
async def price_for_payment(
    currency: str = Path(..., description="Currency code, e.g. usd"),
    amount: str = Path(..., description="Amount in the currency's smallest unit"),
    svc: TurboPricingService = Depends(get_pricing_service),
):
    # Quotes are not bounded by payment limits; only this currency's rate is read
    payment = Payment(amount=amount, type=currency)
    winc = await svc.get_wc_for_payment(payment)
    return {"winc": str(winc), "adjustments": []}
