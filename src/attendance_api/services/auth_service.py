"""Authentication service."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.config import get_settings
from attendance_api.models.dto.auth import TokenResponse
from attendance_api.repositories.admin_user_repository import AdminUserRepository
from attendance_api.security.auth import create_access_token
from attendance_api.security.password import get_password_service
from attendance_api.utils.dates import utc_now

logger = logging.getLogger(__name__)


class AuthService:
    """Service for dashboard authentication."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.user_repo = AdminUserRepository(session)
        self.password_service = get_password_service()

    async def authenticate(self, username: str, password: str) -> TokenResponse:
        """Authenticate an admin with username and password.

        Args:
            username: Admin username
            password: Admin password

        Returns:
            TokenResponse with a bearer token

        Raises:
            HTTPException: If authentication fails
        """
        user = await self.user_repo.get_by_username(username)

        if user is None or not self.password_service.verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for username %r", username)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is disabled",
            )

        await self.user_repo.record_login(user, utc_now())

        settings = get_settings()
        return TokenResponse(
            access_token=create_access_token(user.id, user.username),
            expires_in=settings.jwt_expiration_hours * 3600,
            username=user.username,
        )
