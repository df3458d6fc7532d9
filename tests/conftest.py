"""Common fixtures."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from fakeme.config import BehaviorConfig
from fakeme.domain.entities import Channel, Message, PersonaProfile, StyleNotes, User

BOT_USER_ID = "U_BOT"


@pytest.fixture
def bot_user_id() -> str:
    """Bot user ID for testing."""
    return BOT_USER_ID


@pytest.fixture
def persona() -> PersonaProfile:
    """Create test persona profile."""
    return PersonaProfile(
        display_name="Alice",
        example_messages=("lol yeah", "no way that's wild", "brb getting coffee"),
        style_notes=StyleNotes(
            avg_length=22,
            emoji_frequency=0.05,
            lowercase_dominant=True,
            punctuation_notes=("often omits ending punctuation",),
            common_phrases=("no way",),
        ),
    )


@pytest.fixture
def behavior() -> BehaviorConfig:
    """Create behavior config that always replies without delay."""
    return BehaviorConfig(
        reply_chance=1.0,
        cooldown_ms=5000,
        min_delay_ms=0,
        max_delay_ms=0,
        context_message_count=25,
        ignore_bots=True,
    )


@pytest.fixture
def general_channel() -> Channel:
    """Create test channel."""
    return Channel(id="C123", name="general")


@pytest.fixture
def make_message(general_channel: Channel) -> Callable[..., Message]:
    """Factory for messages posted in #general."""
    base = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    counter = {"n": 0}

    def factory(
        text: str = "hello",
        user_id: str = "U1",
        user_name: str = "bob",
        is_bot: bool = False,
        channel: Channel | None = None,
    ) -> Message:
        counter["n"] += 1
        return Message(
            id=f"1705320000.{counter['n']:06d}",
            channel=channel or general_channel,
            user=User(id=user_id, name=user_name, is_bot=is_bot),
            text=text,
            timestamp=base + timedelta(seconds=counter["n"]),
        )

    return factory


class FakeClock:
    """Manually advanced wall clock returning seconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()
