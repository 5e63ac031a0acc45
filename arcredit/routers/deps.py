from __future__ import annotations

from fastapi import Request

from arcredit.services.pricing import TurboPricingService


def get_pricing_service(request: Request) -> TurboPricingService:
    return request.app.state.pricing_service
