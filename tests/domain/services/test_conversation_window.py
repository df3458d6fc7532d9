"""Tests for conversation window construction."""

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from fakeme.domain.entities import ConversationTurn, Message, TurnRole
from fakeme.domain.services import build_conversation_window, fold_conversation

BOT = "U_BOT"


@pytest.fixture
def mine(make_message: Callable[..., Message]) -> Callable[[str], Message]:
    """Factory for messages sent by the bot."""
    return lambda text: make_message(text, user_id=BOT, user_name="Alice")


@pytest.fixture
def theirs(make_message: Callable[..., Message]) -> Callable[..., Message]:
    """Factory for messages sent by other users."""
    return lambda text, name="bob", user_id="U1": make_message(
        text, user_id=user_id, user_name=name
    )


def assert_alternating(turns: list[ConversationTurn]) -> None:
    for previous, current in zip(turns, turns[1:]):
        assert previous.role != current.role
    if turns:
        assert turns[0].role == TurnRole.COUNTERPART


class TestFoldConversation:
    """fold_conversation tests."""

    def test_empty_input(self) -> None:
        """No messages yield no turns."""
        assert fold_conversation([], BOT) == []

    def test_counterpart_prefixed_with_display_name(self, theirs) -> None:
        """Other users' messages carry a "name: " prefix."""
        turns = fold_conversation([theirs("  hi all  ", name="bob")], BOT)

        assert turns == [ConversationTurn(TurnRole.COUNTERPART, "bob: hi all")]

    def test_self_turn_not_prefixed(self, theirs, mine) -> None:
        """The bot's own messages are kept as plain text."""
        turns = fold_conversation([theirs("hey"), mine(" yo ")], BOT)

        assert turns[1] == ConversationTurn(TurnRole.SELF, "yo")

    def test_alternating_messages_are_not_merged(self, theirs, mine) -> None:
        """N alternating messages produce exactly N turns."""
        messages = [
            theirs("one"),
            mine("two"),
            theirs("three"),
            mine("four"),
            theirs("five"),
        ]

        turns = fold_conversation(messages, BOT)

        assert len(turns) == len(messages)
        assert_alternating(turns)

    def test_adjacent_counterparts_merged_with_newline(self, theirs) -> None:
        """Consecutive messages from others merge, keeping attribution."""
        turns = fold_conversation(
            [theirs("hi", name="bob"), theirs("sup", name="carol", user_id="U2")],
            BOT,
        )

        assert turns == [
            ConversationTurn(TurnRole.COUNTERPART, "bob: hi\ncarol: sup")
        ]

    def test_adjacent_self_merged(self, theirs, mine) -> None:
        """Consecutive bot messages merge into one turn."""
        turns = fold_conversation([theirs("hi"), mine("a"), mine("b")], BOT)

        assert turns[1] == ConversationTurn(TurnRole.SELF, "a\nb")

    def test_empty_messages_skipped(self, theirs, mine) -> None:
        """Empty messages are ignored, so their neighbours can merge."""
        turns = fold_conversation([theirs("hi"), mine("   "), theirs("again")], BOT)

        assert turns == [
            ConversationTurn(TurnRole.COUNTERPART, "bob: hi\nbob: again")
        ]

    def test_leading_self_dropped(self, theirs, mine) -> None:
        """The window never opens with the bot."""
        turns = fold_conversation([mine("first"), theirs("hi")], BOT)

        assert turns == [ConversationTurn(TurnRole.COUNTERPART, "bob: hi")]

    def test_leading_self_run_merged_then_dropped(self, theirs, mine) -> None:
        """self, self, counterpart merges the self pair and drops it whole."""
        turns = fold_conversation(
            [mine("a"), mine("b"), theirs("c"), mine("d")],
            BOT,
        )

        assert turns == [
            ConversationTurn(TurnRole.COUNTERPART, "bob: c"),
            ConversationTurn(TurnRole.SELF, "d"),
        ]

    def test_only_self_messages_yield_empty(self, mine) -> None:
        """A window with only bot messages is empty."""
        assert fold_conversation([mine("a"), mine("b")], BOT) == []

    def test_mixed_input_alternates(self, theirs, mine) -> None:
        """Arbitrary mixes still alternate and start with a counterpart turn."""
        messages = [
            mine("x"),
            theirs("a"),
            theirs(""),
            theirs("b", name="carol", user_id="U2"),
            mine("y"),
            mine(" "),
            mine("z"),
            theirs("c"),
        ]

        turns = fold_conversation(messages, BOT)

        assert_alternating(turns)
        assert [t.role for t in turns] == [
            TurnRole.COUNTERPART,
            TurnRole.SELF,
            TurnRole.COUNTERPART,
        ]


class TestBuildConversationWindow:
    """build_conversation_window tests."""

    async def test_fetches_and_reverses_history(self, theirs, mine) -> None:
        """History is fetched newest-first and folded chronologically."""
        oldest, middle, newest = theirs("first"), mine("second"), theirs("third")
        history = AsyncMock()
        history.fetch_recent_messages = AsyncMock(
            return_value=[newest, middle, oldest]
        )

        turns = await build_conversation_window(history, "C123", BOT, 25)

        history.fetch_recent_messages.assert_awaited_once_with("C123", 25)
        assert [t.content for t in turns] == ["bob: first", "second", "bob: third"]

    async def test_fetch_error_propagates(self) -> None:
        """Fetch failures are not handled here."""
        history = AsyncMock()
        history.fetch_recent_messages = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            await build_conversation_window(history, "C123", BOT, 25)
