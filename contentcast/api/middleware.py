"""
Custom middleware and exception handlers for the FastAPI application.
Provides logging, security headers and consistent error responses.
"""

import time
from typing import Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.responses import JSONResponse

import structlog

from contentcast.core.config import settings
from contentcast.core.exceptions import ContentCastError


logger = structlog.get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log details."""
        start_time = time.perf_counter()

        logger.info(
            "Request started",
            method=request.method,
            url=str(request.url),
            client_ip=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        logger.info(
            "Request completed",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
            process_time=process_time,
        )

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Add security headers to response."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["X-API-Version"] = settings.app_version

        return response


def add_middleware(app: FastAPI) -> None:
    """Add all middleware to the FastAPI app."""

    # CORS middleware (first to handle preflight requests)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Custom middleware (order matters - last added is executed first)
    app.add_middleware(SecurityHeadersMiddleware)

    # Logging (should be last to capture all processing)
    app.add_middleware(LoggingMiddleware)

    logger.info("Middleware configured successfully")


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


async def contentcast_error_handler(request: Request, exc: ContentCastError) -> JSONResponse:
    """Map domain errors onto their HTTP status."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Request rejected",
        url=str(request.url),
        error=exc.code,
        message=exc.message,
        status_code=exc.status_code,
    )

    content = {
        "success": False,
        "error": exc.code,
        "message": exc.message,
    }
    if exc.details:
        content["details"] = exc.details
        # Flat copy of the cap for clients reading ``maxDailyCasts`` directly
        if "maxDailyCasts" in exc.details:
            content["maxDailyCasts"] = exc.details["maxDailyCasts"]

    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Request body/query validation failures are client errors."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"

    logger.warning("Request validation failed", url=str(request.url), message=message)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": "VALIDATION_ERROR",
            "message": message,
        }
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", url=str(request.url), error=str(exc), exc_info=exc)

    message = "An unexpected error occurred" if settings.is_production else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": "INTERNAL_SERVER_ERROR",
            "message": message,
        }
    )


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ContentCastError, contentcast_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
