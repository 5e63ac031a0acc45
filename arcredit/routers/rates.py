from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from arcredit.models.constants import SUPPORTED_PAYMENT_CURRENCIES
from arcredit.services.pricing import TurboPricingService

from .deps import get_pricing_service

"""Rates router.

Endpoints:
    - GET /v1/rates              -> price of 1 GiB in winc and in every supported currency
    - GET /v1/rates/{currency}   -> price of 1 AR in one currency
"""

router = APIRouter(prefix="/v1/rates", tags=["rates"])


@router.get("", summary="Storage rates in winc and fiat")
async def get_rates(svc: TurboPricingService = Depends(get_pricing_service)):
    rates = await svc.get_rates()
    return {
        "winc": str(rates.winc),
        "fiat": rates.fiat,
        "adjustments": [a.to_dict() for a in rates.adjustments],
    }


@router.get("/{currency}", summary="Fiat price of one AR")
async def get_rate_for_currency(
    currency: str,
    svc: TurboPricingService = Depends(get_pricing_service),
):
    currency = currency.lower()
    if currency not in SUPPORTED_PAYMENT_CURRENCIES:
        raise HTTPException(status_code=404, detail="Invalid currency.")
    rate = await svc.get_fiat_price_for_one_ar(currency)
    return {"currency": currency, "rate": rate}
