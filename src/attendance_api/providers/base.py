"""Base chat provider interface."""

from abc import ABC, abstractmethod
from typing import Any


class ChatProvider(ABC):
    """Abstract base class for chat platform integrations."""

    platform: str

    @abstractmethod
    async def test_connection(self) -> bool:
        """Test the provider connection.

        Returns:
            True if connection is successful
        """
        pass

    @abstractmethod
    async def list_members(self) -> list[dict[str, Any]]:
        """Fetch the human members who should receive reminders.

        Returns:
            List of member dicts with keys:
            - id: str (platform user id)
            - username: str
            - display_name: str
        """
        pass

    @abstractmethod
    async def send_direct_message(self, user_id: str, text: str) -> None:
        """Send a direct message to one user.

        Args:
            user_id: Platform user id
            text: Message text
        """
        pass
