"""Slack messaging service."""

import logging

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from fakeme.domain.exceptions import ChannelNotAccessibleError

logger = logging.getLogger(__name__)

# Error codes that indicate the channel is not accessible
_CHANNEL_NOT_ACCESSIBLE_ERRORS = frozenset(
    {
        "not_in_channel",
        "channel_not_found",
        "is_archived",
    }
)


class SlackMessagingService:
    """Slack implementation of MessagingService.

    Slack offers no typing indicator to bot tokens, so composing is shown
    by reacting to the message being answered.
    """

    def __init__(
        self,
        client: AsyncWebClient,
        composing_reaction: str = "eyes",
    ) -> None:
        """Initialize the service.

        Args:
            client: Slack AsyncWebClient instance.
            composing_reaction: Reaction name used as the composing indicator.
        """
        self._client = client
        self._composing_reaction = composing_reaction
        self._bot_user_id: str | None = None

    async def send_message(self, channel_id: str, text: str) -> None:
        """Send a message to a Slack channel.

        Args:
            channel_id: Target channel ID.
            text: Message content.

        Raises:
            ChannelNotAccessibleError: If the channel is not accessible
                (not_in_channel, channel_not_found, is_archived).
            SlackApiError: If the API call fails for other reasons.
        """
        try:
            await self._client.chat_postMessage(channel=channel_id, text=text)
        except SlackApiError as e:
            error_code = e.response.get("error", "") if e.response is not None else ""
            if error_code in _CHANNEL_NOT_ACCESSIBLE_ERRORS:
                raise ChannelNotAccessibleError(
                    channel_id, f"Cannot access channel {channel_id}: {error_code}"
                ) from e
            raise

    async def send_composing_indicator(
        self,
        channel_id: str,
        message_id: str | None = None,
    ) -> None:
        """React to the message being answered.

        Args:
            channel_id: Channel ID.
            message_id: Timestamp of the message being answered. Nothing is
                done without one.
        """
        if not message_id or not self._composing_reaction:
            return
        await self._client.reactions_add(
            channel=channel_id,
            timestamp=message_id,
            name=self._composing_reaction,
        )

    async def clear_composing_indicator(
        self,
        channel_id: str,
        message_id: str | None = None,
    ) -> None:
        """Remove the composing reaction from the answered message.

        Args:
            channel_id: Channel ID.
            message_id: Timestamp of the message that was answered.
        """
        if not message_id or not self._composing_reaction:
            return
        await self._client.reactions_remove(
            channel=channel_id,
            timestamp=message_id,
            name=self._composing_reaction,
        )

    async def get_bot_user_id(self) -> str:
        """Get the bot's user ID.

        Returns:
            The bot's user ID.

        Note:
            The result is cached after the first call.
        """
        if self._bot_user_id is None:
            response = await self._client.auth_test()
            self._bot_user_id = response["user_id"]
        return self._bot_user_id
