"""
Centralized error handlers for FastAPI.

The single terminal translator for the request pipeline. Every failure,
whichever stage raised it, ends up here and leaves as

    {"success": false, "message": str, "errors"?: [str]}

Stack traces are only returned to clients outside production mode.
"""

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from products_api.domain.errors import (
    ApiError,
    InternalError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
ROUTE_NOT_FOUND_MESSAGE = "Route not found"


def error_body(error: ApiError, **extra: Any) -> dict[str, Any]:
    """Build the JSON error contract for a classified failure."""
    body: dict[str, Any] = {"success": False, "message": error.message}
    if error.errors:
        body["errors"] = list(error.errors)
    body.update(extra)
    return body


def _error_response(error: ApiError, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error_body(error, **extra))


def _format_validation_issue(issue: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in issue.get("loc", ()) if part != "body")
    message = issue.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_error_handlers(app: FastAPI, expose_internals: bool = False) -> None:
    """Register the error translator on the FastAPI application.

    Args:
        app: The FastAPI application instance.
        expose_internals: Include exception text and traceback in 500
            responses. Must be False in production.
    """

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        """Translate any classified failure by its kind."""
        logger.warning(
            "%s %s -> %d %s: %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.kind.value,
            exc.message,
        )
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Map framework-level parameter validation onto the Validation kind."""
        issues = [_format_validation_issue(issue) for issue in exc.errors()]
        return _error_response(ValidationError(issues))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Routing-level failures (unknown path, wrong method)."""
        if exc.status_code == 404:
            return _error_response(
                NotFoundError(ROUTE_NOT_FOUND_MESSAGE), path=request.url.path
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unclassified failures."""
        logger.exception(
            "Unexpected error on %s %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
        )
        if not expose_internals:
            return _error_response(InternalError(INTERNAL_ERROR_MESSAGE))
        return _error_response(
            InternalError(f"{type(exc).__name__}: {exc}"),
            stack="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        )
