"""Middleware package."""

from attendance_api.middleware.cors_logging_middleware import CORSLoggingMiddleware

__all__ = [
    "CORSLoggingMiddleware",
]
