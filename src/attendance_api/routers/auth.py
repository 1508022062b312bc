"""Authentication router - dashboard admin login."""

from fastapi import APIRouter, Depends, Request

from attendance_api.dependencies import get_auth_service
from attendance_api.models.dto.auth import LoginRequest, TokenResponse
from attendance_api.security.rate_limit import AUTH_LOGIN_LIMIT, limiter
from attendance_api.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limiter.limit(AUTH_LOGIN_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange admin credentials for a bearer token.

    Rate limited per client IP to slow down password guessing.
    """
    return await auth_service.authenticate(body.username, body.password)
