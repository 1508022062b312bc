"""Admin user domain model."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class AdminUser(BaseModel):
    """Authenticated dashboard administrator."""

    id: UUID
    username: str
    is_active: bool = True
    last_login_at: datetime | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True
