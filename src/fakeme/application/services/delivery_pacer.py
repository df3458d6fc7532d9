"""Human-paced reply delivery."""

import asyncio
import functools
import logging
import math
import random
from collections.abc import Awaitable, Callable, Sequence

from fakeme.config import BehaviorConfig
from fakeme.domain.entities import ConversationTurn
from fakeme.domain.services import (
    SKIP_TOKEN,
    CooldownTracker,
    MessagingService,
    ResponseGenerator,
)

logger = logging.getLogger(__name__)


def clean_response(response: str | None, display_name: str) -> str | None:
    """Interpret and clean raw generated text.

    Args:
        response: Raw generated text.
        display_name: Persona display name.

    Returns:
        Text to send, or None when the reply should be suppressed
        (nothing generated, skip token, or empty after cleanup).
    """
    if not response:
        return None

    cleaned = response.strip()
    if cleaned.startswith(SKIP_TOKEN):
        return None

    # The model sometimes echoes the transcript's "Name: text" format
    name_prefix = f"{display_name}:"
    if cleaned.startswith(name_prefix):
        cleaned = cleaned[len(name_prefix) :].strip()

    return cleaned or None


class DeliveryPacer:
    """Generates and sends a reply at a human-looking pace.

    The generation request and a random delay run concurrently; delivery
    continues only after both finish, so a fast model never shortens the
    delay and a slow one is never cut short.
    """

    def __init__(
        self,
        messaging_service: MessagingService,
        response_generator: ResponseGenerator,
        cooldown: CooldownTracker,
        behavior: BehaviorConfig,
        display_name: str,
        rng: random.Random | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the pacer.

        Args:
            messaging_service: Service for sending messages.
            response_generator: Service for generating responses.
            cooldown: Tracker to record successful sends on.
            behavior: Behavior configuration (delay bounds).
            display_name: Persona display name, stripped from echoed output.
            rng: Random source for the delay.
            sleep: Awaitable sleep taking seconds.
        """
        self._messaging_service = messaging_service
        self._response_generator = response_generator
        self._cooldown = cooldown
        self._behavior = behavior
        self._display_name = display_name
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._indicator_tasks: set[asyncio.Future[None]] = set()

    def choose_delay_ms(self) -> int:
        """Pick a whole-millisecond delay uniformly from [min_delay_ms, max_delay_ms].

        Fractional bounds are rounded inward so the delay never drops below
        the minimum.
        """
        low = math.ceil(self._behavior.min_delay_ms)
        high = max(low, math.floor(self._behavior.max_delay_ms))
        return self._rng.randint(low, high)

    async def deliver(
        self,
        channel_id: str,
        instruction_payload: str,
        conversation: Sequence[ConversationTurn],
        message_id: str | None = None,
    ) -> str | None:
        """Generate a reply and send it after a human-like delay.

        Processing flow:
        1. Suppress immediately if the conversation is empty
        2. Choose a delay and show the composing indicator
        3. Run generation and the delay concurrently, wait for both
        4. Interpret the skip token and strip an echoed name prefix
        5. Send and record the send on the cooldown tracker
        6. Clear the composing indicator, whatever the outcome

        Args:
            channel_id: Channel to reply in.
            instruction_payload: System instructions for the generator.
            conversation: Conversation window.
            message_id: Message being replied to.

        Returns:
            The text that was sent, or None if the reply was suppressed.
        """
        if not conversation:
            logger.debug("Empty conversation in %s, nothing to reply to", channel_id)
            return None

        delay_ms = self.choose_delay_ms()
        indicator = self._start_composing(channel_id, message_id)

        try:
            response, _ = await asyncio.gather(
                self._response_generator.generate(instruction_payload, conversation),
                self._sleep(delay_ms / 1000),
            )

            text = clean_response(response, self._display_name)
            if text is None:
                logger.info("Reply suppressed in %s", channel_id)
                return None

            await self._messaging_service.send_message(
                channel_id=channel_id, text=text
            )
            self._cooldown.record_send(channel_id)
        finally:
            self._stop_composing(channel_id, message_id, indicator)

        logger.info("Replied in %s after %dms", channel_id, delay_ms)
        return text

    def _start_composing(
        self, channel_id: str, message_id: str | None
    ) -> "asyncio.Future[None]":
        """Show the composing indicator without waiting for it."""
        return self._track(
            self._messaging_service.send_composing_indicator(
                channel_id=channel_id, message_id=message_id
            ),
            "send",
        )

    def _stop_composing(
        self,
        channel_id: str,
        message_id: str | None,
        indicator: "asyncio.Future[None]",
    ) -> None:
        """Clear the composing indicator without waiting for it."""
        self._track(self._clear_after(indicator, channel_id, message_id), "clear")

    async def _clear_after(
        self,
        indicator: "asyncio.Future[None]",
        channel_id: str,
        message_id: str | None,
    ) -> None:
        # Clearing must not overtake a still-pending send
        await asyncio.wait([indicator])
        if indicator.cancelled() or indicator.exception() is not None:
            return
        await self._messaging_service.clear_composing_indicator(
            channel_id=channel_id, message_id=message_id
        )

    def _track(
        self, coro: Awaitable[None], action: str
    ) -> "asyncio.Future[None]":
        task = asyncio.ensure_future(coro)
        self._indicator_tasks.add(task)
        task.add_done_callback(functools.partial(self._on_indicator_done, action))
        return task

    def _on_indicator_done(self, action: str, task: "asyncio.Future[None]") -> None:
        self._indicator_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Failed to %s composing indicator: %s", action, exc)
