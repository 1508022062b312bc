"""Authentication DTOs."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Username/password login request."""

    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """Token response DTO."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    username: str
