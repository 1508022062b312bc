"""Holiday DTOs."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer


class HolidayCreate(BaseModel):
    """Request body for creating a holiday."""

    date: date
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)

    class Config:
        """Pydantic config."""

        str_strip_whitespace = True


class HolidayResponse(BaseModel):
    """Holiday response DTO."""

    id: UUID
    date: date
    name: str
    description: str | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True

    @field_serializer("date")
    def serialize_date(self, value: date) -> str:
        return value.strftime("%Y-%m-%d")
