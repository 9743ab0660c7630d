"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to appropriate HTTP status codes and formats.
"""

import logging
from datetime import datetime, timezone

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from review_sentiment.exceptions import ReviewSentimentError
from review_sentiment.session.exceptions import NotReady

logger = logging.getLogger(__name__)


def _error_body(error: str, message: str, details=None) -> dict:
    return {
        "error": error,
        "message": message,
        "details": details or {},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def not_ready_handler(request: Request, exc: NotReady) -> JSONResponse:
    """
    Handle analyze requests made before the session is READY.

    Maps to 409 Conflict (retry once initialization completes).
    """
    logger.info("Analyze rejected, session not ready", extra={"details": exc.details})

    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=_error_body(exc.kind.value, exc.message, exc.details),
    )


async def domain_error_handler(request: Request, exc: ReviewSentimentError) -> JSONResponse:
    """
    Handle corpus/engine errors that escape to the API.

    Maps to 503 Service Unavailable (a required resource is missing).
    """
    logger.error(
        "Domain error",
        extra={"error_type": type(exc).__name__, "details": exc.details},
    )

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body(exc.kind.value, exc.message, exc.details),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle invalid request bodies and parameters.

    Maps to 400 Bad Request (client error).
    """
    logger.warning("Invalid request format", extra={"errors": exc.errors()})

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            "invalid_request",
            "Request validation failed",
            {"errors": jsonable_errors(exc.errors())},
        ),
    )


async def pydantic_validation_error_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors raised while building models.

    Maps to 400 Bad Request (client error).
    """
    logger.warning("Model validation failed", extra={"errors": exc.errors()})

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            "invalid_request",
            "Request validation failed",
            {"errors": jsonable_errors(exc.errors())},
        ),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", extra={"error_type": type(exc).__name__})

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "An unexpected error occurred"),
    )


def jsonable_errors(errors) -> list[dict]:
    """Keep only JSON-safe fields of pydantic error entries."""
    return [
        {"loc": list(e.get("loc", ())), "msg": str(e.get("msg", "")), "type": str(e.get("type", ""))}
        for e in errors
    ]


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    NotReady: not_ready_handler,
    ReviewSentimentError: domain_error_handler,
    RequestValidationError: request_validation_error_handler,
    PydanticValidationError: pydantic_validation_error_handler,
    Exception: generic_error_handler,
}
