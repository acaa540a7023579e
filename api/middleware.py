"""Middleware for request logging and payload limits."""

from __future__ import annotations

import os
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from api.logging_config import (
    get_audit_logger,
    get_performance_logger,
    get_request_logger,
)

request_logger = get_request_logger()
audit_logger = get_audit_logger()
performance_logger = get_performance_logger()

# Intake payloads carry base64 signatures and attachment scans.
DEFAULT_MAX_REQUEST_SIZE = 25 * 1024 * 1024
SLOW_REQUEST_MS = 5000


def max_request_size() -> int:
    raw = os.getenv("MAX_REQUEST_SIZE", "")
    return int(raw) if raw.isdigit() else DEFAULT_MAX_REQUEST_SIZE


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with a correlation ID and its duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"
        request_logger.info(f"[{request_id}] {method} {path} | client={client_ip}")

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status_code = response.status_code
        message = f"[{request_id}] {method} {path} | status={status_code} | duration={duration_ms:.2f}ms"
        if status_code >= 500:
            request_logger.error(message)
        elif status_code >= 400:
            request_logger.warning(message)
        else:
            request_logger.info(message)

        # Claims with many rewritten fields wait on the LLM for each batch.
        if duration_ms > SLOW_REQUEST_MS:
            performance_logger.warning(
                f"Slow request: {method} {path} | duration={duration_ms:.2f}ms | request_id={request_id}"
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"
        return response


class PayloadSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject bodies whose declared Content-Length exceeds the limit."""

    def __init__(self, app: ASGIApp, max_size: int | None = None):
        super().__init__(app)
        self.max_size = max_size if max_size is not None else max_request_size()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length", "")
        if content_length.isdigit() and int(content_length) > self.max_size:
            client_ip = request.client.host if request.client else "unknown"
            audit_logger.warning(
                f"Request payload too large: {content_length} bytes (max: {self.max_size}) | "
                f"client={client_ip} | path={request.url.path}"
            )
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={
                    "error": {
                        "code": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        "message": f"Request payload too large. Maximum size: {self.max_size} bytes",
                        "request_id": getattr(request.state, "request_id", "unknown"),
                    }
                },
            )
        return await call_next(request)
