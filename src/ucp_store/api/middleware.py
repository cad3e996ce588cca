"""Request logging middleware with correlation IDs.

Provides:
- Request/response correlation IDs (``X-Request-ID``)
- Request timing
- Status-aware log levels
"""
from __future__ import annotations

import logging
import time
import uuid
from typing import Callable, Iterable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..logging import request_id_var

logger = logging.getLogger("ucp_store.api")

DEFAULT_EXCLUDE_PATHS = ("/health", "/docs", "/openapi.json")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request logging with correlation IDs.

    - Generates a correlation ID per request, or accepts the caller's
      X-Request-ID header
    - Logs request start and completion with timing
    - Echoes the correlation ID in the response headers
    """

    def __init__(
        self,
        app,
        exclude_paths: Iterable[str] = DEFAULT_EXCLUDE_PATHS,
        slow_request_threshold_ms: float = 1000.0,
    ):
        super().__init__(app)
        self.exclude_paths = frozenset(exclude_paths)
        self.slow_request_threshold_ms = slow_request_threshold_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get("X-Request-ID") or f"req_{uuid.uuid4().hex[:16]}"
        token = request_id_var.set(correlation_id)
        request.state.request_id = correlation_id
        try:
            response = await self._log_request(request, call_next)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = correlation_id
        return response

    async def _log_request(self, request: Request, call_next: Callable) -> Response:
        method = request.method
        path = request.url.path
        quiet = path in self.exclude_paths
        log_level = logging.DEBUG if quiet else logging.INFO

        logger.log(
            log_level,
            f"Request started: {method} {path}",
            extra={
                "event": "request_start",
                "method": method,
                "path": path,
                "client_ip": request.client.host if request.client else "unknown",
            },
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {method} {path}",
                extra={
                    "event": "request_error",
                    "method": method,
                    "path": path,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "duration_ms": round(duration_ms, 2),
                },
                exc_info=True,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        context = {
            "event": "request_complete",
            "method": method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }
        message = f"{method} {path} -> {response.status_code} ({duration_ms:.2f}ms)"

        if response.status_code >= 500:
            logger.error(f"Request completed with server error: {message}", extra=context)
        elif response.status_code >= 400:
            logger.warning(f"Request completed with client error: {message}", extra=context)
        elif duration_ms > self.slow_request_threshold_ms:
            logger.warning(f"Slow request completed: {message}", extra=context)
        else:
            logger.log(log_level, f"Request completed: {message}", extra=context)

        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response


__all__ = ["RequestLoggingMiddleware", "DEFAULT_EXCLUDE_PATHS"]
