"""
Chirpy - social posting service API

Main FastAPI application.
"""

import secrets
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from chirpy.api.v1.api import admin_router, api_router
from chirpy.auth.errors import AuthError
from chirpy.core.config import env_flag, get_trusted_hosts
from chirpy.core.database import init_db, close_db
from chirpy.core.logging import get_logger
from chirpy.schemas.common import ErrorResponse

logger = get_logger(__name__)


# =============================================================================
# Application Lifespan (startup/shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    logger.info("Starting Chirpy...")

    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down Chirpy...")
    await close_db()


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Chirpy API",
    version="1.0.0",
    description="Social posting service",
    lifespan=lifespan,
    docs_url="/docs" if env_flag("ENABLE_DOCS", "true") else None,
    redoc_url="/redoc" if env_flag("ENABLE_DOCS", "true") else None,
)


# =============================================================================
# Security Middleware
# =============================================================================

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: Callable):
        response = await call_next(request)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # Tokens must never be cached by intermediaries
        response.headers["Cache-Control"] = "no-store"

        if not request.url.path.startswith(("/docs", "/redoc")):
            response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        # HSTS (only enable in production with HTTPS)
        if env_flag("ENABLE_HSTS"):
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add unique request ID for tracing."""

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get("X-Request-ID") or secrets.token_urlsafe(8)
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response


# =============================================================================
# Add Middleware (order matters - first added = last executed)
# =============================================================================

trusted_hosts = get_trusted_hosts()
if "*" not in trusted_hosts:
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=trusted_hosts)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIDMiddleware)


# =============================================================================
# Routes
# =============================================================================

@app.get("/api/healthz", tags=["health"], response_class=PlainTextResponse)
async def readiness():
    """Readiness probe for load balancers."""
    return "OK"


app.include_router(api_router, prefix="/api")
app.include_router(admin_router, prefix="/admin")


# =============================================================================
# Error Handlers
# =============================================================================

@app.exception_handler(AuthError)
async def auth_exception_handler(request: Request, exc: AuthError):
    """Map auth failures to their status with a generic, fixed message."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.info(
        "[%s] %s %s -> %s: %s",
        request_id, request.method, request.url.path, type(exc).__name__, exc.reason,
    )

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(detail=exc.detail).model_dump(exclude_none=True),
        headers=headers,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to prevent information leakage."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.exception("[%s] Unhandled exception: %s", request_id, exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            detail="An internal error occurred",
            request_id=request_id,
        ).model_dump(),
    )


# =============================================================================
# Development Server
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chirpy.main:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
        log_level="info",
    )
