"""Background task scheduler using APScheduler."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from attendance_api.config import get_settings

logger = logging.getLogger(__name__)

# Global scheduler instance
_scheduler: AsyncIOScheduler | None = None


async def _send_reminder_job(text: str, name: str) -> None:
    from attendance_api.database import async_session_maker
    from attendance_api.services.reminder_service import ReminderService

    logger.info("Starting %s", name)

    async with async_session_maker() as session:
        try:
            result = await ReminderService(session).send_reminder(text)
            logger.info("%s completed: %s", name, result)
        except Exception as e:
            logger.error("%s failed: %s", name, e, exc_info=True)


async def checkin_reminder_job() -> None:
    """Background job reminding everyone to check in."""
    from attendance_api.services.reminder_service import CHECKIN_REMINDER

    await _send_reminder_job(CHECKIN_REMINDER, "Check-in reminder")


async def checkout_reminder_job() -> None:
    """Background job reminding everyone to check out."""
    from attendance_api.services.reminder_service import CHECKOUT_REMINDER

    await _send_reminder_job(CHECKOUT_REMINDER, "Check-out reminder")


async def start_scheduler() -> None:
    """Start the background task scheduler."""
    global _scheduler

    settings = get_settings()
    if not settings.reminders_enabled:
        logger.info("Reminder jobs disabled; scheduler not started")
        return

    _scheduler = AsyncIOScheduler(timezone=settings.tzinfo)

    _scheduler.add_job(
        checkin_reminder_job,
        trigger=CronTrigger.from_crontab(settings.checkin_reminder_cron, timezone=settings.tzinfo),
        id="checkin_reminder",
        name="Check-in reminder",
        replace_existing=True,
    )

    _scheduler.add_job(
        checkout_reminder_job,
        trigger=CronTrigger.from_crontab(settings.checkout_reminder_cron, timezone=settings.tzinfo),
        id="checkout_reminder",
        name="Check-out reminder",
        replace_existing=True,
    )

    _scheduler.start()
    logger.info("Background scheduler started (timezone %s)", settings.timezone)


async def stop_scheduler() -> None:
    """Stop the background task scheduler."""
    global _scheduler

    if _scheduler:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        logger.info("Background scheduler stopped")
