"""
Error taxonomy and the handlers that turn errors into JSON responses.

Every error leaves the API as ``{"error": "<human readable message>"}``.
Services raise subclasses of :class:`ApiError`; the handlers registered by
:func:`register_exception_handlers` map them to their HTTP status.  FastAPI
request validation failures and Starlette's own HTTP errors (unknown
route, unsupported method) are folded into the same body shape.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """A required field is missing or an update carries no fields."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    """No row exists for the requested id (or no price for a currency)."""

    status_code = status.HTTP_404_NOT_FOUND


class RouteNotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Route not found") -> None:
        super().__init__(message)


class StorageError(ApiError):
    """The underlying SQLite store failed; carries the driver message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class PriceFeedError(ApiError):
    """The remote price feed could not be fetched or parsed."""

    status_code = status.HTTP_502_BAD_GATEWAY


def error_body(message: str) -> Dict[str, Any]:
    return {"error": message}


def _describe_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    # Only the first problem is reported; clients fix one field at a time.
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query")]
    message = first.get("msg", "Invalid request")
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    # A path id that is not an integer can never name a stored resource.
    if any(err.get("loc", ())[:1] == ("path",) for err in errors):
        return await api_error_handler(request, NotFoundError("Resource not found"))
    if not errors:
        return await api_error_handler(request, ValidationError("Invalid request"))
    return await api_error_handler(request, ValidationError(_describe_validation_errors(errors)))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Express-style routing: a path without a handler for this method is
    # simply an unknown route.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return await api_error_handler(request, RouteNotFound())
    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to ``app``."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
