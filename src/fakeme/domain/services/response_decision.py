"""Response decision pipeline."""

import logging
import random
from collections.abc import Iterable

from fakeme.config import BehaviorConfig
from fakeme.domain.entities import Message
from fakeme.domain.services.cooldown import CooldownTracker

logger = logging.getLogger(__name__)


class ResponseDecision:
    """Decide whether an inbound message should get a reply.

    Gates run in a fixed order and stop at the first failure:

    1. direct_message: private conversations are out of scope
    2. channel: channel is not in the allow-set
    3. self: message was sent by the participant itself
    4. bot: author is automated and bots are ignored
    5. empty: trimmed text is empty (attachment or embed only)
    6. chance: uniform draw in [0, 1) exceeds reply_chance
    7. cooldown: channel is still cooling down

    Only the random draw and the cooldown read have effects; nothing is
    recorded here.
    """

    def __init__(
        self,
        channels: Iterable[str],
        bot_user_id: str,
        behavior: BehaviorConfig,
        cooldown: CooldownTracker,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            channels: Allowed channel IDs.
            bot_user_id: The participant's own user ID.
            behavior: Behavior configuration (ignore_bots, reply_chance).
            cooldown: Cooldown tracker to consult.
            rng: Random source for the reply chance draw.
        """
        self._channels = frozenset(channels)
        self._bot_user_id = bot_user_id
        self._behavior = behavior
        self._cooldown = cooldown
        self._rng = rng or random.Random()

    def evaluate(self, message: Message) -> str | None:
        """Run the gates against a message.

        Args:
            message: Inbound message.

        Returns:
            Name of the first gate that rejected the message, or None if
            every gate passed.
        """
        if message.channel.is_direct:
            return "direct_message"

        if message.channel.id not in self._channels:
            return "channel"

        if message.is_from(self._bot_user_id):
            return "self"

        if self._behavior.ignore_bots and message.user.is_bot:
            return "bot"

        if message.is_empty():
            return "empty"

        if self._rng.random() > self._behavior.reply_chance:
            return "chance"

        if self._cooldown.is_on_cooldown(message.channel.id):
            return "cooldown"

        return None

    def should_respond(self, message: Message) -> bool:
        """Check whether the message passes every gate.

        Args:
            message: Inbound message.

        Returns:
            True if generation should proceed.
        """
        rejected_by = self.evaluate(message)
        if rejected_by is not None:
            logger.debug(
                "Message %s in %s rejected by %s gate",
                message.id,
                message.channel.id,
                rejected_by,
            )
            return False
        return True
