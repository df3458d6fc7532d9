"""Domain service protocols."""

from collections.abc import Sequence
from typing import Protocol

from fakeme.domain.entities import ConversationTurn, Message, PersonaProfile

# Returned by a ResponseGenerator when no reply is warranted
SKIP_TOKEN = "[SKIP]"


class ConversationHistoryService(Protocol):
    """Conversation history retrieval abstraction (platform-independent).

    This protocol defines the interface for fetching recent messages
    from any messaging platform (Slack, Discord, etc.).
    """

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
            List of messages, newest first.
        """
        ...


class MessagingService(Protocol):
    """Messaging abstraction (platform-independent).

    This protocol defines the interface for sending messages
    to any messaging platform (Slack, Discord, etc.).
    """

    async def send_message(self, channel_id: str, text: str) -> None:
        """Send a message to a channel.

        Args:
            channel_id: Target channel ID.
            text: Message content.
        """
        ...

    async def send_composing_indicator(
        self,
        channel_id: str,
        message_id: str | None = None,
    ) -> None:
        """Signal that a reply is being composed.

        Args:
            channel_id: Target channel ID.
            message_id: Message being replied to, if the platform needs one.
        """
        ...

    async def clear_composing_indicator(
        self,
        channel_id: str,
        message_id: str | None = None,
    ) -> None:
        """Withdraw the composing signal once the reply is settled.

        Args:
            channel_id: Target channel ID.
            message_id: Message that was being replied to.
        """
        ...


class ResponseGenerator(Protocol):
    """Response generation abstraction.

    This protocol defines the interface for generating
    responses using LLM or other mechanisms.
    """

    async def generate(
        self,
        instruction_payload: str,
        conversation: Sequence[ConversationTurn],
    ) -> str | None:
        """Generate a response.

        Args:
            instruction_payload: System instructions describing the persona.
            conversation: Conversation window, oldest turn first.

        Returns:
            Generated text (possibly SKIP_TOKEN), or None when nothing
            usable was produced.
        """
        ...


class InstructionBuilder(Protocol):
    """Builds the system instruction payload for a persona."""

    def build(self, persona: PersonaProfile) -> str:
        """Build the instruction payload.

        Args:
            persona: Persona profile.

        Returns:
            Instruction text.
        """
        ...
