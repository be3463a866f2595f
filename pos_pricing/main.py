import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .db.migrate import apply_migrations
from .core import errors
from .routers import health, rates, pricing, checkout, statistics, scanner
from .services.rates.rate_service import RateService, build_rate_service


def create_app(
    settings_override: Settings | None = None,
    rate_service: RateService | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB). Falls back to cached get_settings().
    rate_service: prebuilt service (e.g. with a stub provider); built from
    settings when omitted.
    """
    settings = settings_override or get_settings()
    init_logging(debug=settings.debug)

    try:
        apply_migrations(settings.db_path, settings.rate_slot_key)  # type: ignore[arg-type]
    except Exception:
        logging.getLogger("pos_pricing").exception("failed to apply migrations on startup")
        raise

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings
    app.state.rate_service = rate_service or build_rate_service(settings)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.not_found_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(errors.FetchError, errors.fetch_error_handler)
    app.add_exception_handler(errors.ValidationError, errors.domain_validation_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(rates.router)
    app.include_router(pricing.router)
    app.include_router(checkout.router)
    app.include_router(statistics.router)
    app.include_router(scanner.router)

    @app.get("/")
    async def root():
        return {"message": "POS Pricing API", "version": settings.version}

    return app
