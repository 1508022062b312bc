"""Centralized dependency injection factories for FastAPI.

This module provides reusable service factory functions for dependency injection,
eliminating duplicate definitions across routers.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.config import get_settings
from attendance_api.database import get_db
from attendance_api.providers.discord import DiscordProvider
from attendance_api.providers.slack import SlackProvider
from attendance_api.services.analytics_service import AnalyticsService
from attendance_api.services.auth_service import AuthService
from attendance_api.services.command_service import CommandService
from attendance_api.services.employee_service import EmployeeService
from attendance_api.services.holiday_service import HolidayService
from attendance_api.services.leave_service import LeaveService
from attendance_api.services.settings_service import SettingsService
from attendance_api.services.wizard_store import WizardStore


# =============================================================================
# Dashboard Service Factories
# =============================================================================


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Get AuthService instance."""
    return AuthService(db)


def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(db)


def get_analytics_service(db: AsyncSession = Depends(get_db)) -> AnalyticsService:
    """Get AnalyticsService instance."""
    return AnalyticsService(db)


def get_settings_service(db: AsyncSession = Depends(get_db)) -> SettingsService:
    """Get SettingsService instance."""
    return SettingsService(db)


def get_holiday_service(db: AsyncSession = Depends(get_db)) -> HolidayService:
    """Get HolidayService instance."""
    return HolidayService(db)


def get_leave_service(db: AsyncSession = Depends(get_db)) -> LeaveService:
    """Get LeaveService instance."""
    return LeaveService(db)


# =============================================================================
# Bot Factories
# =============================================================================


def get_command_service(db: AsyncSession = Depends(get_db)) -> CommandService:
    """Get CommandService instance bound to today's date."""
    return CommandService(db)


def get_slack_provider() -> SlackProvider:
    """Get SlackProvider for the configured bot token."""
    return SlackProvider(get_settings().slack_bot_token)


def get_discord_provider() -> DiscordProvider:
    """Get DiscordProvider for the configured bot token and guild."""
    settings = get_settings()
    return DiscordProvider(settings.discord_bot_token, settings.discord_guild_id)


def get_wizard_store() -> WizardStore:
    """Get the shared check-in wizard store."""
    return WizardStore.get_instance()
