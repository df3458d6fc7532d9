"""Handler for inbound channel messages.

Wires the response decision, conversation window and delivery pacer
into a single per-message flow. A failure while handling one message is
logged and never affects other messages.
"""

import logging

from fakeme.application.services import DeliveryPacer
from fakeme.domain.entities import Message, PersonaProfile
from fakeme.domain.services import (
    ConversationHistoryService,
    CooldownTracker,
    InstructionBuilder,
    ResponseDecision,
    build_conversation_window,
)

logger = logging.getLogger(__name__)


class MessageHandler:
    """Orchestrates the reply pipeline for each inbound message."""

    def __init__(
        self,
        decision: ResponseDecision,
        history_service: ConversationHistoryService,
        instruction_builder: InstructionBuilder,
        pacer: DeliveryPacer,
        cooldown: CooldownTracker,
        persona: PersonaProfile,
        bot_user_id: str,
        context_message_count: int,
    ) -> None:
        """Initialize the handler.

        Args:
            decision: Gate sequence deciding whether to reply.
            history_service: Service for fetching recent channel messages.
            instruction_builder: Builds the persona instruction payload.
            pacer: Generates and delivers the reply.
            cooldown: Cooldown tracker shared with the decision and pacer.
            persona: Persona profile.
            bot_user_id: The bot's user ID.
            context_message_count: Number of messages in the window.
        """
        self._decision = decision
        self._history_service = history_service
        self._instruction_builder = instruction_builder
        self._pacer = pacer
        self._cooldown = cooldown
        self._persona = persona
        self._bot_user_id = bot_user_id
        self._context_message_count = context_message_count

    async def handle(self, message: Message) -> None:
        """Handle an inbound message.

        Exceptions are logged and swallowed; nothing is retried.

        Args:
            message: The received message.
        """
        try:
            await self._process(message)
        except Exception:
            logger.exception(
                "Error handling message %s in channel %s",
                message.id,
                message.channel.id,
            )

    async def _process(self, message: Message) -> None:
        """Run the pipeline for a single message.

        Processing flow:
        1. Run the decision gates
        2. Take the channel lock and re-check the cooldown
        3. Build the instruction payload and conversation window
        4. Deliver the reply (or suppress it)
        """
        if not self._decision.should_respond(message):
            return

        channel_id = message.channel.id
        async with self._cooldown.lock(channel_id):
            # Another reply may have been sent while waiting for the lock
            if self._cooldown.is_on_cooldown(channel_id):
                logger.debug("Channel %s went on cooldown while waiting", channel_id)
                return

            logger.info("Preparing reply to %s in %s", message.id, channel_id)

            instruction_payload = self._instruction_builder.build(self._persona)
            conversation = await build_conversation_window(
                self._history_service,
                channel_id,
                self._bot_user_id,
                self._context_message_count,
            )

            await self._pacer.deliver(
                channel_id=channel_id,
                instruction_payload=instruction_payload,
                conversation=conversation,
                message_id=message.id,
            )
