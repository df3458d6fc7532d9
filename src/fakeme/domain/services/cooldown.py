"""Per-channel cooldown tracking."""

import asyncio
import time
from collections.abc import Callable


class CooldownTracker:
    """Per-channel last-send store.

    Answers whether a channel is still cooling down and records sends.
    Entries live for the lifetime of the tracker and are never pruned;
    the key space is bounded by the configured channel set.

    Slack Bolt runs event handlers concurrently, so callers that need an
    atomic check-then-record sequence for a channel hold ``lock(channel_id)``
    around it.
    """

    def __init__(
        self,
        cooldown_ms: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the tracker.

        Args:
            cooldown_ms: Minimum milliseconds between two sends in a channel.
            clock: Wall-clock source returning seconds.
        """
        self._cooldown_ms = cooldown_ms
        self._clock = clock
        self._last_sent: dict[str, float] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def is_on_cooldown(self, channel_id: str) -> bool:
        """Check if the channel is on cooldown (too soon to send).

        Args:
            channel_id: Channel ID.

        Returns:
            True if a send was recorded less than cooldown_ms ago.
        """
        last = self._last_sent.get(channel_id)
        if last is None:
            return False
        elapsed_ms = (self._clock() - last) * 1000
        return elapsed_ms < self._cooldown_ms

    def record_send(self, channel_id: str) -> None:
        """Record that a message was just sent in the given channel."""
        self._last_sent[channel_id] = self._clock()

    def lock(self, channel_id: str) -> asyncio.Lock:
        """Get the lock serializing send decisions for a channel.

        Args:
            channel_id: Channel ID.

        Returns:
            The channel's lock (created on first use).
        """
        if channel_id not in self._locks:
            self._locks[channel_id] = asyncio.Lock()
        return self._locks[channel_id]
