"""FastAPI surface for the family-court document engine."""

from __future__ import annotations

import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.logging_config import configure_logging
from api.middleware import PayloadSizeLimitMiddleware, RequestLoggingMiddleware
from api.routes import build_factory, limiter
from api.routes import router as documents_router
from document_engine.exceptions import (
    DocumentGenerationError,
    EngineError,
    UnsupportedClaimTypeError,
    ValidationError,
)

configure_logging()

logger = logging.getLogger("claims.api")

ENGINE_ERROR_STATUS: dict[type[EngineError], int] = {
    ValidationError: 422,
    UnsupportedClaimTypeError: 404,
    DocumentGenerationError: 400,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting family-court document API")
    app.state.factory = build_factory()
    logger.info(f"Document factory ready (transformer: {app.state.factory.transformer.name})")

    yield

    logger.info("Shutting down family-court document API")


app = FastAPI(
    title="Family Court Claims API",
    description="Composes Hebrew family-court claims, statements of details, powers of attorney and affidavits.",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.startup_time = time.time()

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

cors_origins = os.getenv("CORS_ORIGINS", "").split(",")
cors_origins = [origin.strip() for origin in cors_origins if origin.strip()]

if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time-Ms", "Content-Disposition"],
    )

app.add_middleware(GZipMiddleware, minimum_size=1000)

# Last added runs first: every request, rejected ones included, gets an ID.
app.add_middleware(PayloadSizeLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)


def error_response(request: Request, status_code: int, message: str, **extra) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": status_code, "message": message, **extra, "request_id": request_id}},
    )


@app.exception_handler(EngineError)
async def engine_exception_handler(request: Request, exc: EngineError) -> JSONResponse:
    """Map engine errors to 4xx; unexpected engine failures are 500s."""
    status_code = next(
        (code for error_type, code in ENGINE_ERROR_STATUS.items() if isinstance(exc, error_type)),
        500,
    )
    if status_code == 500:
        logger.error(f"Engine failure: {exc.message} | request_id={getattr(request.state, 'request_id', 'unknown')}")
    else:
        logger.warning(f"{exc.__class__.__name__}: {exc.message}")
    return error_response(
        request,
        status_code,
        exc.message,
        type=exc.__class__.__name__,
        details=exc.details,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(request, exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": " -> ".join(str(loc) for loc in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return error_response(request, 422, "Validation error", details=errors[:10])


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")
    logger.exception(f"Unhandled exception: {exc} | request_id={request_id}")
    return error_response(request, 500, "Internal server error")


app.include_router(documents_router, prefix="/documents", tags=["documents"])


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "healthy"}


@app.get("/health/live", tags=["system"])
async def liveness_check() -> dict[str, str]:
    return {"status": "alive"}


@app.get("/health/ready", tags=["system"])
async def readiness_check(request: Request) -> dict:
    """Ready once the document factory exists."""
    checks = {"factory": getattr(request.app.state, "factory", None) is not None}
    uptime_seconds = time.time() - getattr(request.app.state, "startup_time", time.time())
    return {
        "status": "ready" if all(checks.values()) else "not_ready",
        "uptime_seconds": round(uptime_seconds, 2),
        "checks": checks,
    }
