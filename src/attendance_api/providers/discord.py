"""Discord REST API client for the attendance bot."""

import asyncio
import logging
from typing import Any, ClassVar

import httpx

from attendance_api.providers.base import ChatProvider

logger = logging.getLogger(__name__)

# Discord API constants
DISCORD_API_BASE = "https://discord.com/api/v10"
DISCORD_TIMEOUT = 30.0
DISCORD_CONNECT_TIMEOUT = 10.0
DISCORD_MAX_RETRIES = 3
DISCORD_RETRY_DELAY = 1.0
DISCORD_MEMBER_PAGE_SIZE = 1000

USER_AGENT = "DiscordBot (https://discord.com, 10) AttendanceTracker/1.0"


class DiscordProvider(ChatProvider):
    """Discord guild integration: member listing and DMs."""

    platform = "discord"

    # Shared HTTP client for connection reuse
    _http_client: ClassVar[httpx.AsyncClient | None] = None

    def __init__(self, bot_token: str, guild_id: str) -> None:
        """Initialize Discord provider.

        Args:
            bot_token: Discord bot token
            guild_id: Guild (server) whose members get reminders
        """
        self.bot_token = bot_token
        self.guild_id = guild_id

    @classmethod
    def _get_http_client(cls) -> httpx.AsyncClient:
        """Get or create shared HTTP client with connection pooling."""
        if cls._http_client is None or cls._http_client.is_closed:
            cls._http_client = httpx.AsyncClient(
                base_url=DISCORD_API_BASE,
                timeout=httpx.Timeout(DISCORD_TIMEOUT, connect=DISCORD_CONNECT_TIMEOUT),
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
                headers={"User-Agent": USER_AGENT},
            )
        return cls._http_client

    @classmethod
    async def close_client(cls) -> None:
        """Close the shared HTTP client."""
        if cls._http_client and not cls._http_client.is_closed:
            await cls._http_client.aclose()
            cls._http_client = None

    async def _api_call_with_retry(
        self,
        method: str,
        path: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make Discord API call with retry and rate limit handling.

        Args:
            method: HTTP method
            path: API path relative to the versioned base URL
            json_data: Optional JSON payload
            params: Optional query parameters

        Returns:
            Decoded JSON response

        Raises:
            httpx.HTTPStatusError: On non-retryable HTTP errors
            httpx.HTTPError: On connection errors after retries
        """
        client = self._get_http_client()
        headers = {"Authorization": f"Bot {self.bot_token}"}

        for attempt in range(DISCORD_MAX_RETRIES):
            try:
                response = await client.request(
                    method.upper(), path, headers=headers, json=json_data, params=params
                )

                if response.status_code == 429:
                    retry_after = float(
                        response.json().get("retry_after")
                        or response.headers.get("Retry-After", DISCORD_RETRY_DELAY)
                    )
                    logger.warning("Discord rate limited on %s, retry in %ss", path, retry_after)
                    await asyncio.sleep(retry_after)
                    continue

                if response.status_code >= 500 and attempt < DISCORD_MAX_RETRIES - 1:
                    delay = DISCORD_RETRY_DELAY * (2**attempt)
                    logger.warning("Discord server error %s on %s, retrying in %ss", response.status_code, path, delay)
                    await asyncio.sleep(delay)
                    continue

                response.raise_for_status()
                return response.json() if response.content else None

            except httpx.TimeoutException:
                if attempt < DISCORD_MAX_RETRIES - 1:
                    delay = DISCORD_RETRY_DELAY * (2**attempt)
                    logger.warning("Discord timeout on %s, retrying in %ss", path, delay)
                    await asyncio.sleep(delay)
                else:
                    raise

        raise httpx.HTTPError(f"Discord API: max retries exceeded on {path}")

    async def test_connection(self) -> bool:
        """Test Discord API connection.

        Returns:
            True if the bot token is valid
        """
        try:
            data = await self._api_call_with_retry("GET", "/users/@me")
            return bool(data and data.get("id"))
        except httpx.HTTPError as e:
            logger.warning("Discord connection test failed: %s", e)
            return False

    async def list_members(self) -> list[dict[str, Any]]:
        """List the non-bot members of the configured guild.

        Returns:
            List of member dicts (id, username, display_name)
        """
        members: list[dict[str, Any]] = []
        after = "0"

        while True:
            page = await self._api_call_with_retry(
                "GET",
                f"/guilds/{self.guild_id}/members",
                params={"limit": DISCORD_MEMBER_PAGE_SIZE, "after": after},
            )
            if not page:
                break

            for member in page:
                user = member.get("user", {})
                if user.get("bot"):
                    continue
                members.append(
                    {
                        "id": user["id"],
                        "username": user.get("username", user["id"]),
                        "display_name": member.get("nick")
                        or user.get("global_name")
                        or user.get("username", user["id"]),
                    }
                )

            if len(page) < DISCORD_MEMBER_PAGE_SIZE:
                break
            after = page[-1]["user"]["id"]

        return members

    async def send_direct_message(self, user_id: str, text: str) -> None:
        """Open (or reuse) a DM channel with a user and post a message."""
        channel = await self._api_call_with_retry(
            "POST", "/users/@me/channels", {"recipient_id": user_id}
        )
        await self._api_call_with_retry(
            "POST", f"/channels/{channel['id']}/messages", {"content": text}
        )
