"""Project settings DTOs."""

from datetime import date

from pydantic import BaseModel, Field


class ProjectSettingsResponse(BaseModel):
    """Current project settings."""

    project_start_date: date | None = None
    annual_leave_days: int
    annual_leave_reset_date: str


class ProjectSettingsUpdate(BaseModel):
    """Partial update of project settings; omitted fields stay unchanged."""

    project_start_date: date | None = None
    annual_leave_days: int | None = Field(default=None, ge=0, le=365)
    annual_leave_reset_date: str | None = Field(default=None, max_length=5)
