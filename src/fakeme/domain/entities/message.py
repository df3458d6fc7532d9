"""Message entity."""

from dataclasses import dataclass
from datetime import datetime

from fakeme.domain.entities.channel import Channel
from fakeme.domain.entities.user import User


@dataclass(frozen=True)
class Message:
    """Message entity.

    Attributes:
        id: Platform-specific message ID.
        channel: Channel where the message was posted.
        user: User who sent the message.
        text: Message content.
        timestamp: When the message was sent.
    """

    id: str
    channel: Channel
    user: User
    text: str
    timestamp: datetime

    @property
    def stripped_text(self) -> str:
        """Message text without surrounding whitespace."""
        return self.text.strip()

    def is_empty(self) -> bool:
        """Check if the message carries no text (attachment or embed only).

        Returns:
            True if the trimmed text is empty.
        """
        return not self.stripped_text

    def is_from(self, user_id: str) -> bool:
        """Check if the message was sent by the given user.

        Args:
            user_id: The user ID to compare against.

        Returns:
            True if the author matches.
        """
        return self.user.id == user_id
