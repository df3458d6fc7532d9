"""Tests for CooldownTracker."""

from typing import Any

from fakeme.domain.services import CooldownTracker


class TestCooldownTracker:
    """CooldownTracker tests."""

    def test_not_on_cooldown_initially(self, clock: Any) -> None:
        """A fresh tracker has no channel on cooldown."""
        tracker = CooldownTracker(5000, clock=clock)

        assert tracker.is_on_cooldown("C1") is False

    def test_on_cooldown_right_after_send(self, clock: Any) -> None:
        """Recording a send puts the channel on cooldown."""
        tracker = CooldownTracker(5000, clock=clock)

        tracker.record_send("C1")

        assert tracker.is_on_cooldown("C1") is True

    def test_cooldown_expires(self, clock: Any) -> None:
        """Cooldown ends once cooldown_ms has elapsed."""
        tracker = CooldownTracker(5000, clock=clock)
        tracker.record_send("C1")

        clock.advance_ms(4999)
        assert tracker.is_on_cooldown("C1") is True

        clock.advance_ms(1)
        assert tracker.is_on_cooldown("C1") is False

    def test_cooldown_is_per_channel(self, clock: Any) -> None:
        """Sending in one channel does not affect another."""
        tracker = CooldownTracker(5000, clock=clock)

        tracker.record_send("C1")

        assert tracker.is_on_cooldown("C2") is False

    def test_record_send_overwrites(self, clock: Any) -> None:
        """A later send restarts the cooldown window."""
        tracker = CooldownTracker(5000, clock=clock)
        tracker.record_send("C1")
        clock.advance_ms(4000)

        tracker.record_send("C1")
        clock.advance_ms(4000)

        assert tracker.is_on_cooldown("C1") is True

    def test_zero_cooldown_never_blocks(self, clock: Any) -> None:
        """With a zero cooldown the channel is never cooling down."""
        tracker = CooldownTracker(0, clock=clock)

        tracker.record_send("C1")

        assert tracker.is_on_cooldown("C1") is False

    def test_trackers_do_not_share_state(self, clock: Any) -> None:
        """Each tracker owns its own state."""
        first = CooldownTracker(5000, clock=clock)
        second = CooldownTracker(5000, clock=clock)

        first.record_send("C1")

        assert second.is_on_cooldown("C1") is False

    async def test_lock_is_per_channel(self, clock: Any) -> None:
        """The same lock is returned for a channel, distinct across channels."""
        tracker = CooldownTracker(5000, clock=clock)

        assert tracker.lock("C1") is tracker.lock("C1")
        assert tracker.lock("C1") is not tracker.lock("C2")
