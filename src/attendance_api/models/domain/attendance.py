"""Attendance domain enums."""

from enum import StrEnum


class Platform(StrEnum):
    """Chat platform an employee uses."""

    DISCORD = "discord"
    SLACK = "slack"


class WorkLocation(StrEnum):
    """Where an employee works from on a given day."""

    OFFICE = "office"
    REMOTE = "remote"


class Mood(StrEnum):
    """Mood options offered at check-in."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    OKAY = "Okay"
    TIRED = "Tired"
    STRESSED = "Stressed"
    SICK = "Sick"
    MOTIVATED = "Motivated"
    ANXIOUS = "Anxious"
    OVERWHELMED = "Overwhelmed"
    FOCUSED = "Focused"


class ContributionLevel(StrEnum):
    """Display level of one employee-day, in display order."""

    INACTIVE = "inactive"
    NON_WORKING = "non_working"
    ON_LEAVE = "on_leave"
    ABSENT = "absent"
    PARTIAL = "partial"
    COMPLETE = "complete"
    GOOD = "good"
    EXCELLENT = "excellent"

    @property
    def ordinal(self) -> int:
        """Position of the level in display order."""
        return list(ContributionLevel).index(self)


class DayState(StrEnum):
    """Per-day command state of one employee."""

    NO_RECORD = "no_record"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"
    ON_LEAVE = "on_leave"
