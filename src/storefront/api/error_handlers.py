"""Central error translation.

Every failure raised while handling a request ends up here and is
rendered as ``{"message": ..., "error": {...}}``. The ``error`` object is
empty when the app runs in production.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.dto import ErrorResponse
from storefront.exceptions import StorefrontError, ValidationError

logger = structlog.get_logger(__name__)

INVALID_REQUEST_MESSAGE = "Requisição inválida"


def error_response(
    request: Request,
    status_code: int,
    message: str,
    error_type: str,
    detail: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the JSON error response.

    Args:
        request: The failed request (used to read the production flag)
        status_code: HTTP status to send
        message: Human-readable message, always present
        error_type: Name of the error class
        detail: Raw failure detail, hidden in production
        headers: Extra response headers

    Returns:
        JSONResponse with the error body
    """
    settings = getattr(request.app.state, "settings", None)
    production = settings is not None and settings.is_production

    error: dict[str, Any] = {}
    if not production:
        error = {"type": error_type, "status": status_code, "detail": jsonable_encoder(detail)}

    body = ErrorResponse(message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on the app."""

    @app.exception_handler(StorefrontError)
    async def handle_storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error_type=type(exc).__name__,
                error=exc.message,
            )
        else:
            logger.info(
                "Request rejected",
                method=request.method,
                path=request.url.path,
                status=exc.status_code,
                error=exc.message,
            )
        return error_response(request, exc.status_code, exc.message, type(exc).__name__, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Request rejected", method=request.method, path=request.url.path, status=400)
        return error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            INVALID_REQUEST_MESSAGE,
            ValidationError.__name__,
            exc.errors(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(
            request,
            exc.status_code,
            str(exc.detail),
            type(exc).__name__,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", method=request.method, path=request.url.path)
        return error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc) or "Internal Server Error",
            type(exc).__name__,
            repr(exc),
        )
