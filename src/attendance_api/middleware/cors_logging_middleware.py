"""CORS logging middleware for security monitoring."""

import logging
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# Server-to-server webhooks, never called from a browser
WEBHOOK_PREFIXES = ("/slack/", "/discord/")


class CORSLoggingMiddleware(BaseHTTPMiddleware):
    """Log requests from origins outside the dashboard allow-list.

    Should be added AFTER CORSMiddleware so it runs BEFORE it on requests.
    """

    def __init__(self, app, allowed_origins: list[str]) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application
            allowed_origins: List of allowed origin URLs
        """
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        origin = request.headers.get("origin")
        path = request.url.path

        if origin and origin not in self.allowed_origins and not path.startswith(WEBHOOK_PREFIXES):
            logger.warning(
                "CORS origin rejected",
                extra={
                    "origin": origin,
                    "method": request.method,
                    "path": path,
                    "client_ip": request.client.host if request.client else "unknown",
                },
            )

        return await call_next(request)
