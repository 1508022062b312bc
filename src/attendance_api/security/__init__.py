"""Security package."""

from attendance_api.security.auth import create_access_token, decode_token, get_current_user
from attendance_api.security.password import PasswordService, get_password_service

__all__ = [
    "PasswordService",
    "create_access_token",
    "decode_token",
    "get_current_user",
    "get_password_service",
]
