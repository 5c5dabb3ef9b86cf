"""
Error responder - turns error values into the JSON error envelope.

Domain code raises ApiError subclasses; nothing is written until one of
the exception handlers below calls error_response(). Every handler logs
the failure before delivering it.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.models import ErrorResponse
from src.api.validation import validation_error_from
from src.config.settings import get_settings
from src.domain.exceptions import ApiError, InternalError, NotFoundError

logger = logging.getLogger(__name__)


def error_response(error: ApiError, headers: dict[str, str] | None = None) -> JSONResponse:
    """Deliver an error value as a single JSON response."""
    body = ErrorResponse(error=error.error, message=error.message, details=error.details)
    return JSONResponse(
        status_code=error.status_code,
        content=body.model_dump(),
        headers=headers,
    )


def _route(request: Request) -> str:
    return f"{request.method} {request.url.path}"


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.error(f"Error occurred {_route(request)}: {exc.message} ({exc.status_code})")
    return error_response(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report the first schema violation with the configured status."""
    error = validation_error_from(exc.errors(), get_settings().validation_error_status)
    logger.error(f"Validation failed {_route(request)}: {error.message}")
    return error_response(error)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Wrap routing errors in the envelope.

    A known path requested with an unrouted method is an unmatched route,
    so 405 from the router is reported as 404 like any other miss.
    """
    headers = None
    if exc.status_code in (404, 405):
        error: ApiError = NotFoundError("Not Found")
    else:
        error = ApiError(str(exc.detail), status_code=exc.status_code)
        headers = exc.headers
    logger.error(f"Route error {_route(request)}: {error.message} ({error.status_code})")
    return error_response(error, headers=headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler for anything not raised as an ApiError.

    Runs outside the middleware stack, so CORS headers are attached here.
    """
    logger.exception(f"Unhandled error {_route(request)}")
    return error_response(InternalError(), headers=request.app.state.cors_headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on an application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
