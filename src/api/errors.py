"""Exception handlers rendering errors as ``{"error": reason, ...}`` bodies."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.errors import AppError, InvalidCredentialError

logger = logging.getLogger(__name__)

# PostgreSQL lock_not_available and query_canceled (lock_timeout, statement_timeout)
TIMEOUT_PGCODES = {"55P03", "57014"}


def http_reason(status_code: int) -> str:
    """Kebab-case reason for a bare HTTP status, e.g. 405 -> method-not-allowed."""
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return "http-error"
    return phrase.lower().replace(" ", "-").replace("'", "")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the application's exception handlers."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.reason}")
        headers = None
        if isinstance(exc, InvalidCredentialError):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": http_reason(exc.status_code), "message": str(exc.detail)},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "invalid-input",
                "message": "Request validation failed",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(OperationalError)
    async def store_error_handler(request: Request, exc: OperationalError) -> JSONResponse:
        if getattr(exc.orig, "pgcode", None) in TIMEOUT_PGCODES:
            reason, message = "store-timeout", "Database operation timed out"
        else:
            reason, message = "store-unavailable", "Database unavailable"
        logger.warning(f"{request.method} {request.url.path} -> 503 {reason}: {exc.orig}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": reason, "message": message},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "internal", "message": "Internal server error"},
        )
