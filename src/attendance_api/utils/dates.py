"""Calendar helpers resolved in the configured timezone."""

from datetime import date, datetime, timezone

from attendance_api.config import get_settings


def local_now() -> datetime:
    """Get the current time in the configured timezone."""
    return datetime.now(get_settings().tzinfo)


def local_today() -> date:
    """Get today's calendar date in the configured timezone."""
    return local_now().date()


def utc_now() -> datetime:
    """Get the current UTC time (stored timestamps are UTC)."""
    return datetime.now(timezone.utc)


def format_local_time(value: datetime | None) -> str | None:
    """Format a stored timestamp as local HH:MM for chat replies."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(get_settings().tzinfo).strftime("%H:%M")


def hours_between(start: datetime | None, end: datetime | None) -> float | None:
    """Hours between two timestamps, rounded to two decimals."""
    if start is None or end is None:
        return None
    return round((end - start).total_seconds() / 3600, 2)
