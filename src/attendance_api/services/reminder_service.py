"""Check-in / check-out reminder DMs."""

import logging
from dataclasses import dataclass
from datetime import date

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.config import get_settings
from attendance_api.providers.base import ChatProvider
from attendance_api.providers.discord import DiscordProvider
from attendance_api.providers.slack import SlackProvider
from attendance_api.services.holiday_service import HolidayService
from attendance_api.utils.dates import local_today

logger = logging.getLogger(__name__)

CHECKIN_REMINDER = "🌞 Good morning! Please don't forget to /checkin today."
CHECKOUT_REMINDER = "🌇 The work day is over! Please remember to /checkout before leaving."


@dataclass
class ReminderResult:
    """Outcome of one reminder batch."""

    sent: int = 0
    failed: int = 0
    skipped_holiday: bool = False


def get_chat_providers() -> list[ChatProvider]:
    """Build a provider for every configured chat platform."""
    settings = get_settings()
    providers: list[ChatProvider] = []
    if settings.slack_enabled:
        providers.append(SlackProvider(settings.slack_bot_token))
    if settings.discord_enabled and settings.discord_guild_id:
        providers.append(DiscordProvider(settings.discord_bot_token, settings.discord_guild_id))
    return providers


class ReminderService:
    """Sends a reminder DM to every member of every chat platform."""

    def __init__(
        self,
        session: AsyncSession,
        providers: list[ChatProvider] | None = None,
        today: date | None = None,
    ) -> None:
        """Initialize service.

        Args:
            session: Database session (for the holiday lookup)
            providers: Chat providers to notify (defaults to configured ones)
            today: Calendar date of the run (defaults to local today)
        """
        self.session = session
        self.providers = get_chat_providers() if providers is None else providers
        self.today = today or local_today()
        self.holiday_service = HolidayService(session)

    async def send_reminder(self, text: str) -> ReminderResult:
        """Send one reminder text to everyone, unless today is a holiday.

        A failure for one recipient is logged and the batch continues.

        Args:
            text: Reminder text

        Returns:
            ReminderResult with sent/failed counts
        """
        result = ReminderResult()

        if await self.holiday_service.is_holiday(self.today):
            logger.info("Skipping reminder on holiday %s", self.today)
            result.skipped_holiday = True
            return result

        for provider in self.providers:
            try:
                members = await provider.list_members()
            except (httpx.HTTPError, ValueError) as e:
                logger.error("Failed to list %s members: %s", provider.platform, e)
                continue

            for member in members:
                try:
                    await provider.send_direct_message(member["id"], text)
                    result.sent += 1
                except (httpx.HTTPError, ValueError) as e:
                    result.failed += 1
                    logger.warning(
                        "Failed to send %s reminder to %s: %s",
                        provider.platform,
                        member.get("username", member["id"]),
                        e,
                    )

        logger.info("Reminder batch done: %d sent, %d failed", result.sent, result.failed)
        return result
