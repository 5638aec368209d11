"""Application error taxonomy and its HTTP mapping.

Protean's own exceptions (``ValidationError`` and friends) are mapped by
``protean.integrations.fastapi.register_exception_handlers``. The errors
below cover what Protean does not model: authentication, authorization,
lookups answered with 404, duplicates and unreachable upstream services.
Malformed request bodies are answered with 400, like domain validation errors.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

logger = structlog.get_logger(__name__)


class StorefrontError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code = 500

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context


class AuthenticationError(StorefrontError):
    status_code = 401


class AuthorizationError(StorefrontError):
    status_code = 403


class NotFoundError(StorefrontError):
    status_code = 404


class ConflictError(StorefrontError):
    status_code = 409


class UpstreamUnavailable(StorefrontError):
    status_code = 503


async def _storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Request failed",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        error=exc.message,
        **exc.context,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{location}: {first.get('msg', 'Invalid request')}" if location else first.get("msg", "Invalid request")
    logger.info("Request rejected", path=request.url.path, method=request.method, error=message)
    return JSONResponse(status_code=400, content={"error": message})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    """Attach Protean and application exception handlers to ``app``."""
    register_exception_handlers(app)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StorefrontError, _storefront_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
