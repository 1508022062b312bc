"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from attendance_api.config import get_settings
from attendance_api.exceptions import AttendanceAPIError
from attendance_api.middleware.cors_logging_middleware import CORSLoggingMiddleware
from attendance_api.middleware.error_handler import (
    attendance_api_error_handler,
    generic_exception_handler,
    http_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from attendance_api.routers import (
    analytics,
    attendance,
    auth,
    discord_bot,
    employees,
    holidays,
    leaves,
    settings,
    slack_bot,
)
from attendance_api.security.rate_limit import limiter
from attendance_api.tasks.scheduler import start_scheduler, stop_scheduler

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"
        response.headers.setdefault("Vary", "Accept, Authorization, Origin")
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
        # Strict Transport Security (HSTS) - only outside debug mode
        if not get_settings().debug:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    config = get_settings()
    logger.info(
        "Starting %s (slack=%s, discord=%s, timezone=%s)",
        config.app_name,
        config.slack_enabled,
        config.discord_enabled,
        config.timezone,
    )

    await start_scheduler()
    yield
    await stop_scheduler()

    # Close shared clients to release connections
    from attendance_api.providers.discord import DiscordProvider
    from attendance_api.providers.slack import SlackProvider
    from attendance_api.services.wizard_store import WizardStore

    await SlackProvider.close_client()
    await DiscordProvider.close_client()
    await WizardStore.close()


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Custom rate limit handler returning RFC 7807 Problem Details.

    Includes Retry-After header per RFC 6585 Section 4.
    """
    return JSONResponse(
        status_code=429,
        content={
            "type": "https://datatracker.ietf.org/doc/html/rfc6585#section-4",
            "title": "Too many requests",
            "status": 429,
            "detail": "Rate limit exceeded",
            "instance": request.url.path,
        },
        headers={
            "Content-Type": "application/problem+json",
            "Retry-After": "60",
        },
    )


def _allowed_origins(config) -> list[str]:
    """Validate configured CORS origins.

    Raises:
        ValueError: On a wildcard origin
    """
    allowed_origins = []
    for origin in config.cors_origins_list:
        # Wildcards are not allowed together with credentials
        if origin == "*":
            raise ValueError(
                "CORS_ORIGINS cannot contain '*' wildcard when allow_credentials=True. "
                "Specify explicit origins."
            )
        if origin.startswith(("http://", "https://")):
            allowed_origins.append(origin)
    return allowed_origins


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_settings()

    app = FastAPI(
        title=config.app_name,
        version="0.1.0",
        description="Attendance and leave tracking API",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain errors carry their own message; everything else is sanitized
    app.add_exception_handler(AttendanceAPIError, attendance_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    allowed_origins = _allowed_origins(config)

    # Middleware runs in REVERSE order of addition
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
    # Added after CORSMiddleware so it runs BEFORE it on incoming requests
    app.add_middleware(CORSLoggingMiddleware, allowed_origins=allowed_origins)

    # Dashboard API
    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(employees.router, prefix="/api/employees", tags=["Employees"])
    app.include_router(attendance.router, prefix="/api/attendance", tags=["Attendance"])
    app.include_router(analytics.router, prefix="/api/analytics", tags=["Analytics"])
    app.include_router(settings.router, prefix="/api/settings", tags=["Settings"])
    app.include_router(holidays.router, prefix="/api/holidays", tags=["Holidays"])
    app.include_router(leaves.router, prefix="/api/leaves", tags=["Leaves"])

    # Chat bot webhooks
    app.include_router(slack_bot.router, prefix="/slack", tags=["Slack"])
    app.include_router(discord_bot.router, prefix="/discord", tags=["Discord"])

    @app.get("/api/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
