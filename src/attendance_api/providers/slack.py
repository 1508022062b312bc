"""Slack Web API client for the attendance bot."""

import asyncio
import logging
from typing import Any, ClassVar

import httpx

from attendance_api.providers.base import ChatProvider

logger = logging.getLogger(__name__)

# Slack API constants
SLACK_API_BASE = "https://slack.com/api"
SLACK_TIMEOUT = 30.0
SLACK_CONNECT_TIMEOUT = 10.0
SLACK_MAX_RETRIES = 3
SLACK_RETRY_DELAY = 1.0

USER_AGENT = "AttendanceTracker/1.0"

NON_RETRYABLE_ERRORS = frozenset(
    {"invalid_auth", "token_revoked", "account_inactive", "missing_scope", "not_authed"}
)


class SlackProvider(ChatProvider):
    """Slack workspace integration: modals, DMs and member listing."""

    platform = "slack"

    # Shared HTTP client for connection reuse
    _http_client: ClassVar[httpx.AsyncClient | None] = None

    def __init__(self, bot_token: str) -> None:
        """Initialize Slack provider.

        Args:
            bot_token: Slack bot OAuth token (xoxb-...)
        """
        self.bot_token = bot_token

    @classmethod
    def _get_http_client(cls) -> httpx.AsyncClient:
        """Get or create shared HTTP client with connection pooling."""
        if cls._http_client is None or cls._http_client.is_closed:
            cls._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(SLACK_TIMEOUT, connect=SLACK_CONNECT_TIMEOUT),
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
                headers={
                    "User-Agent": USER_AGENT,
                    "Content-Type": "application/json; charset=utf-8",
                },
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
        endpoint: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make Slack API call with retry and rate limit handling.

        Args:
            method: HTTP method (GET or POST)
            endpoint: API method name, e.g. ``chat.postMessage``
            json_data: Optional JSON payload
            params: Optional query parameters

        Returns:
            API response as dict

        Raises:
            ValueError: On non-retryable API errors
            httpx.HTTPError: On connection errors after retries
        """
        client = self._get_http_client()
        url = f"{SLACK_API_BASE}/{endpoint}"
        headers = {"Authorization": f"Bearer {self.bot_token}"}

        for attempt in range(SLACK_MAX_RETRIES):
            try:
                if method.upper() == "GET":
                    response = await client.get(url, headers=headers, params=params)
                else:
                    response = await client.post(url, headers=headers, params=params, json=json_data or {})

                # Handle rate limiting
                if response.status_code == 429:
                    retry_after = float(response.headers.get("Retry-After", SLACK_RETRY_DELAY))
                    logger.warning("Slack rate limited on %s, retry in %ss", endpoint, retry_after)
                    await asyncio.sleep(retry_after)
                    continue

                data = response.json()

                if data.get("ok"):
                    return data

                error = data.get("error", "unknown_error")

                if error in NON_RETRYABLE_ERRORS:
                    raise ValueError(f"Slack API error: {error}")

                if attempt < SLACK_MAX_RETRIES - 1:
                    delay = SLACK_RETRY_DELAY * (2**attempt)
                    logger.warning("Slack API error on %s: %s, retrying in %ss", endpoint, error, delay)
                    await asyncio.sleep(delay)
                else:
                    raise ValueError(f"Slack API error after retries: {error}")

            except httpx.TimeoutException:
                if attempt < SLACK_MAX_RETRIES - 1:
                    delay = SLACK_RETRY_DELAY * (2**attempt)
                    logger.warning("Slack timeout on %s, retrying in %ss", endpoint, delay)
                    await asyncio.sleep(delay)
                else:
                    raise

        raise ValueError(f"Slack API error: max retries exceeded on {endpoint}")

    async def test_connection(self) -> bool:
        """Test Slack API connection.

        Returns:
            True if connection is successful
        """
        try:
            data = await self._api_call_with_retry("POST", "auth.test")
            return data.get("ok", False)
        except (ValueError, httpx.HTTPError) as e:
            logger.warning("Slack connection test failed: %s", e)
            return False

    async def list_members(self) -> list[dict[str, Any]]:
        """List human, non-deleted workspace members.

        Returns:
            List of member dicts (id, username, display_name)
        """
        members: list[dict[str, Any]] = []
        cursor = None

        while True:
            params: dict[str, Any] = {"limit": 200}
            if cursor:
                params["cursor"] = cursor

            data = await self._api_call_with_retry("GET", "users.list", params=params)

            for member in data.get("members", []):
                user_id = member.get("id")
                if member.get("is_bot") or member.get("deleted") or user_id == "USLACKBOT":
                    continue
                profile = member.get("profile", {})
                members.append(
                    {
                        "id": user_id,
                        "username": member.get("name", user_id),
                        "display_name": profile.get("display_name")
                        or profile.get("real_name")
                        or member.get("name", user_id),
                    }
                )

            cursor = data.get("response_metadata", {}).get("next_cursor")
            if not cursor:
                break

        return members

    async def get_user(self, user_id: str) -> dict[str, Any]:
        """Get username and display name of a workspace member."""
        data = await self._api_call_with_retry("GET", "users.info", params={"user": user_id})
        user = data.get("user", {})
        profile = user.get("profile", {})
        return {
            "id": user_id,
            "username": user.get("name", user_id),
            "display_name": profile.get("display_name") or profile.get("real_name") or user.get("name", user_id),
        }

    async def open_view(self, trigger_id: str, view: dict[str, Any]) -> None:
        """Open a modal in response to a slash command.

        Args:
            trigger_id: Trigger id from the slash command payload
            view: Block Kit modal view
        """
        await self._api_call_with_retry("POST", "views.open", {"trigger_id": trigger_id, "view": view})

    async def post_message(
        self,
        channel: str,
        text: str,
        blocks: list[dict[str, Any]] | None = None,
    ) -> None:
        """Post a message to a channel or, given a user id, to the user's DM."""
        payload: dict[str, Any] = {"channel": channel, "text": text}
        if blocks:
            payload["blocks"] = blocks
        await self._api_call_with_retry("POST", "chat.postMessage", payload)

    async def send_direct_message(self, user_id: str, text: str) -> None:
        """Send a direct message to one user."""
        await self.post_message(user_id, text)
