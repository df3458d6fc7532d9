"""Slack event adapter."""

from fakeme.domain.entities import Channel, Message
from fakeme.infrastructure.slack.conversions import (
    DIRECT_CHANNEL_TYPES,
    payload_to_message,
)
from fakeme.infrastructure.slack.users import SlackUserDirectory


class SlackEventAdapter:
    """Convert Slack events to domain entities.

    This adapter translates Slack-specific event payloads into
    platform-independent domain entities.
    """

    def __init__(self, users: SlackUserDirectory) -> None:
        """Initialize the adapter.

        Args:
            users: User directory for author lookup.
        """
        self._users = users

    async def to_message(self, event: dict) -> Message:
        """Convert a Slack message event to a Message entity.

        Args:
            event: Slack message event payload.

        Returns:
            Message entity.
        """
        channel = Channel(
            id=event["channel"],
            is_direct=event.get("channel_type") in DIRECT_CHANNEL_TYPES,
        )
        return await payload_to_message(event, channel, self._users)
