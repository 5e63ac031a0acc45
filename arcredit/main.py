import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core import errors
from .core.config import Settings, get_settings
from .core.logging import init_logging, request_context_middleware
from .routers import currencies, health, price, rates
from .services.pricing import TurboPricingService


def create_app(
    settings_override: Settings | None = None,
    pricing_service: TurboPricingService | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    pricing_service: inject a service wired to fake oracles; by default one is
    built from settings with read-through caches in front of the live oracles.
    """
    settings = settings_override or get_settings()
    if settings_override is not None:
        settings.init_post_load()
    # Initialize logging early
    init_logging(debug=settings.debug)

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings
    app.state.pricing_service = pricing_service or TurboPricingService.from_settings(
        settings
    )
    logging.getLogger("arcredit").info(
        "pricing service ready",
        extra={
            "context": {
                "fiat_oracle": settings.fiat_oracle_kind,
                "bytes_oracle": settings.bytes_oracle_kind,
                "subsidy_percentage": settings.subsidized_winc_percentage,
            }
        },
    )

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_exception_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(errors.InvalidDataError, errors.invalid_data_handler)
    app.add_exception_handler(
        errors.PaymentAmountOutOfRange, errors.payment_out_of_range_handler
    )
    app.add_exception_handler(errors.OracleUnavailable, errors.oracle_unavailable_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(price.router)
    app.include_router(rates.router)
    app.include_router(currencies.router)

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "version": settings.version}

    return app


app = create_app()
