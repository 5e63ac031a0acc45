from fastapi import APIRouter, Depends

from arcredit.models.constants import SUPPORTED_PAYMENT_CURRENCIES
from arcredit.services.pricing import TurboPricingService

from .deps import get_pricing_service

router = APIRouter(prefix="/v1/currencies", tags=["currencies"])


@router.get("", summary="Supported currencies and their current payment limits")
async def list_currencies(svc: TurboPricingService = Depends(get_pricing_service)):
    limits = await svc.get_currency_limitations()
    return {
        "supported_currencies": list(SUPPORTED_PAYMENT_CURRENCIES),
        "limits": {currency: limit.model_dump() for currency, limit in limits.items()},
    }
