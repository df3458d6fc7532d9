"""Slack conversation history service."""

from slack_sdk.web.async_client import AsyncWebClient

from fakeme.domain.entities import Channel, Message
from fakeme.infrastructure.slack.conversions import payload_to_message
from fakeme.infrastructure.slack.users import SlackUserDirectory


class SlackConversationHistoryService:
    """Slack implementation of ConversationHistoryService.

    Fetches recent channel messages using the conversations.history API.
    """

    EXCLUDED_SUBTYPES = frozenset(
        {
            "message_changed",
            "message_deleted",
            "channel_join",
            "channel_leave",
            "channel_topic",
            "channel_purpose",
        }
    )

    def __init__(self, client: AsyncWebClient, users: SlackUserDirectory) -> None:
        """Initialize the service.

        Args:
            client: Slack AsyncWebClient.
            users: User directory for author lookup.
        """
        self._client = client
        self._users = users

    async def fetch_recent_messages(
        self,
        channel_id: str,
        limit: int,
    ) -> list[Message]:
        """Fetch the most recent messages of a channel.

        Args:
            channel_id: Channel ID.
            limit: Maximum number of messages to fetch.

        Returns:
            List of messages, newest first (as the API returns them).
        """
        response = await self._client.conversations_history(
            channel=channel_id,
            limit=limit,
        )

        channel = Channel(id=channel_id)
        messages = []
        for msg in response.get("messages") or []:
            if msg.get("subtype") in self.EXCLUDED_SUBTYPES or "ts" not in msg:
                continue
            messages.append(await payload_to_message(msg, channel, self._users))

        return messages
