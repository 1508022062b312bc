"""Exception handlers turning errors into JSON responses.

Domain errors carry a message written for people and are returned as-is.
Everything else (database failures, unexpected exceptions) is logged and
answered with a generic message so internals never reach the client.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from attendance_api.config import get_settings
from attendance_api.exceptions import AttendanceAPIError

logger = logging.getLogger(__name__)

GENERIC_MESSAGES = {
    400: "Invalid request",
    401: "Authentication required",
    404: "Resource not found",
    409: "Resource already exists",
    422: "Invalid input data",
    500: "Internal server error",
}

# Validation responses list at most this many field errors
MAX_VALIDATION_ERRORS = 3


def _json_error(request: Request, status_code: int, content: dict[str, Any]) -> JSONResponse:
    """Build an error response carrying CORS headers.

    Exception handlers run outside the CORS middleware, so allowed origins
    are echoed here or the browser hides the error from the dashboard.
    """
    headers = {}
    origin = request.headers.get("origin")
    if origin and origin in get_settings().cors_origins_list:
        headers = {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def summarize_validation_errors(errors: list[dict[str, Any]]) -> str:
    """Reduce pydantic errors to ``field: message`` pairs.

    Args:
        errors: Output of ``RequestValidationError.errors()``

    Returns:
        Semicolon separated summary, or a generic message
    """
    parts = []
    for error in errors:
        loc = error.get("loc", [])
        field = loc[-1] if loc else "field"
        if isinstance(field, str) and not field.startswith("_"):
            parts.append(f"{field}: {error.get('msg', 'Invalid value')}")
    if not parts:
        return GENERIC_MESSAGES[422]
    return "; ".join(parts[:MAX_VALIDATION_ERRORS])


async def attendance_api_error_handler(request: Request, exc: AttendanceAPIError) -> JSONResponse:
    """Return a domain error's own message with the status of its branch."""
    logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return _json_error(request, exc.status_code, {"detail": exc.message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by auth, signature checks and routing.

    Details raised in this codebase are fixed strings; anything else is
    replaced by the generic message for the status.
    """
    if isinstance(exc.detail, str):
        detail = exc.detail
    else:
        detail = GENERIC_MESSAGES.get(exc.status_code, "Request failed")
    return _json_error(request, exc.status_code, {"detail": detail})


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors."""
    logger.warning("Validation error for %s: %s", request.url.path, exc.errors())

    if get_settings().debug:
        detail: Any = exc.errors()
    else:
        detail = summarize_validation_errors(exc.errors())
    return _json_error(request, status.HTTP_422_UNPROCESSABLE_ENTITY, {"detail": detail})


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle database errors without leaking SQL or driver details.

    Writes that may collide go through savepoint inserts, so an
    ``IntegrityError`` reaching this point is a uniqueness race.
    """
    logger.error("Database error for %s: %s", request.url.path, type(exc).__name__, exc_info=True)

    if isinstance(exc, IntegrityError):
        return _json_error(request, status.HTTP_409_CONFLICT, {"detail": GENERIC_MESSAGES[409]})

    content: dict[str, Any] = {"detail": "Database error occurred"}
    if get_settings().debug:
        content["type"] = type(exc).__name__
    return _json_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, content)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error("Unhandled exception for %s: %s", request.url.path, exc, exc_info=True)

    if get_settings().debug:
        content = {"detail": str(exc), "type": type(exc).__name__}
    else:
        content = {"detail": GENERIC_MESSAGES[500]}
    return _json_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, content)
