"""Domain exceptions and the FastAPI handlers that render them as JSON.

``FetchError`` and ``ValidationError`` are raised by the rate service; an
unavailable conversion is never an exception, callers get ``None`` back.
"""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
import logging

logger = logging.getLogger("pos_pricing.errors")


class PricingError(Exception):
    """Base class for pricing subsystem failures."""


class FetchError(PricingError):
    """Upstream rate provider unreachable or returned an unusable payload."""


class ValidationError(PricingError):
    """Rejected input (e.g. a manual rate that is not a finite number > 0)."""


def not_found_handler(request: Request, exc):  # type: ignore
    if getattr(exc, "status_code", 404) != 404:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "http_error", "detail": exc.detail},
        )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "not_found",
            "detail": f"No route for {request.method} {request.url.path}",
        },
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def fetch_error_handler(request: Request, exc: FetchError):  # type: ignore
    logger.warning("rate fetch failed: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": "fetch_error", "detail": str(exc)},
    )


def domain_validation_handler(request: Request, exc: ValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "validation_error", "detail": str(exc)},
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
