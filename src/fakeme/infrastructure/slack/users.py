"""Slack user lookup with an in-process cache."""

import logging

from slack_sdk.web.async_client import AsyncWebClient

from fakeme.domain.entities import User

logger = logging.getLogger(__name__)


class SlackUserDirectory:
    """Resolve Slack user IDs to User entities.

    Results are cached for the lifetime of the process to minimize
    users.info calls.
    """

    def __init__(self, client: AsyncWebClient) -> None:
        """Initialize the directory.

        Args:
            client: Slack AsyncWebClient.
        """
        self._client = client
        self._cache: dict[str, User] = {}

    async def get_user(self, user_id: str) -> User:
        """Get a user from cache or fetch from Slack API.

        Args:
            user_id: Slack user ID.

        Returns:
            User entity.
        """
        cached = self._cache.get(user_id)
        if cached is not None:
            return cached

        user_info = await self._client.users_info(user=user_id)
        user_data = user_info["user"]

        user = User(
            id=user_data["id"],
            name=display_name_of(user_data),
            is_bot=user_data.get("is_bot", False),
        )
        self._cache[user_id] = user
        logger.debug("Cached user %s as %s", user_id, user.name)
        return user


def display_name_of(user_data: dict) -> str:
    """Pick the name people see for a Slack user.

    Prefers the profile display name, then the real name, then the handle.
    """
    profile = user_data.get("profile") or {}
    for candidate in (
        profile.get("display_name"),
        profile.get("real_name"),
        user_data.get("real_name"),
        user_data.get("name"),
    ):
        if candidate:
            return candidate
    return user_data.get("id", "unknown")
