"""Exception handlers for the store API.

Errors are returned as RFC 7807 Problem Details:
{
    "type": "https://ucp.dev/errors/<error-type>",
    "title": "Human-readable error title",
    "status": 400,
    "detail": "Detailed error description",
    "instance": "/checkout-sessions",
    "request_id": "req_abc123",
    "error": "PRODUCT_NOT_FOUND",
    "details": {"item_id": "ghost"}
}
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..exceptions import UCPStoreException

logger = logging.getLogger(__name__)

ERROR_TYPE_BASE = "https://ucp.dev/errors"

PROBLEM_CONTENT_TYPE = "application/problem+json"

STATUS_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    422: "Validation Error",
    500: "Internal Server Error",
}


@dataclass
class ProblemDetail:
    """RFC 7807 Problem Details representation."""
    type: str
    title: str
    status: int
    detail: str
    instance: str
    request_id: str
    extensions: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "type": self.type,
            "title": self.title,
            "status": self.status,
            "detail": self.detail,
            "instance": self.instance,
            "request_id": self.request_id,
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        }
        if self.extensions:
            result.update(self.extensions)
        return result


def get_request_id(request: Request) -> str:
    """Extract request ID from request state or headers."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("X-Request-ID", "unknown")


def problem_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Build an RFC 7807 JSON response for the current request."""
    request_id = get_request_id(request)
    extensions: Dict[str, Any] = {"error": error_code}
    if details:
        extensions["details"] = details

    problem = ProblemDetail(
        type=f"{ERROR_TYPE_BASE}/{error_code.lower().replace('_', '-')}",
        title=STATUS_TITLES.get(status_code, error_code.replace("_", " ").title()),
        status=status_code,
        detail=message,
        instance=request.url.path,
        request_id=request_id,
        extensions=extensions,
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.to_dict(),
        headers={"X-Request-ID": request_id},
        media_type=PROBLEM_CONTENT_TYPE,
    )


def register_exception_handlers(app: FastAPI, *, expose_internal_errors: bool = True) -> None:
    """Register the store's exception handlers with the FastAPI application.

    Args:
        app: Application to register on
        expose_internal_errors: Include exception text in 500 responses
            (disable in production)
    """

    @app.exception_handler(UCPStoreException)
    async def store_exception_handler(request: Request, exc: UCPStoreException) -> JSONResponse:
        if exc.http_status >= 500:
            logger.error(
                f"Internal error: {exc.error_code} - {exc.message}",
                extra={"error_code": exc.error_code, "path": request.url.path},
                exc_info=exc,
            )
            if not expose_internal_errors:
                return problem_response(request, exc.http_status, "INTERNAL_ERROR", "An internal error occurred")
        else:
            logger.warning(
                f"Client error: {exc.error_code} - {exc.message}",
                extra={"error_code": exc.error_code, "path": request.url.path},
            )

        return problem_response(request, exc.http_status, exc.error_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        logger.warning(
            f"Validation error: {len(errors)} field(s) failed",
            extra={"path": request.url.path},
        )
        return problem_response(
            request,
            422,
            "VALIDATION_ERROR",
            "One or more fields failed validation",
            {"errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        error_code = STATUS_TITLES.get(exc.status_code, "HTTP Error").upper().replace(" ", "_")
        return problem_response(
            request,
            exc.status_code,
            error_code,
            str(exc.detail) if exc.detail else "An error occurred",
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {exc}",
            extra={"path": request.url.path, "error_type": type(exc).__name__},
            exc_info=exc,
        )
        message = f"{type(exc).__name__}: {exc}" if expose_internal_errors else "An internal error occurred"
        return problem_response(request, 500, "INTERNAL_ERROR", message)


__all__ = [
    "ERROR_TYPE_BASE",
    "ProblemDetail",
    "get_request_id",
    "problem_response",
    "register_exception_handlers",
]
