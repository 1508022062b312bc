"""Background tasks package."""

from attendance_api.tasks.scheduler import start_scheduler, stop_scheduler

__all__ = [
    "start_scheduler",
    "stop_scheduler",
]
