"""Chat platform providers."""

from attendance_api.providers.base import ChatProvider
from attendance_api.providers.discord import DiscordProvider
from attendance_api.providers.slack import SlackProvider

__all__ = [
    "ChatProvider",
    "DiscordProvider",
    "SlackProvider",
]
