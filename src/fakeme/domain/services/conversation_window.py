"""Conversation window construction.

Reduces recent channel history to an alternating, role-tagged sequence of
turns suitable for a turn-based chat completion API:

- messages from the participant become ``SELF`` turns, everyone else's
  become ``COUNTERPART`` turns prefixed with the author's display name
- adjacent turns with the same role are merged with a newline
- a leading run of ``SELF`` turns is dropped, since the API requires the
  dialogue to open with the counterpart
"""

from collections.abc import Iterable

from fakeme.domain.entities import ConversationTurn, Message, TurnRole
from fakeme.domain.services.protocols import ConversationHistoryService


def fold_conversation(
    messages: Iterable[Message],
    bot_user_id: str,
) -> list[ConversationTurn]:
    """Fold chronological messages into conversation turns.

    Args:
        messages: Messages in chronological order (oldest first).
        bot_user_id: The participant's own user ID.

    Returns:
        Turns with no two adjacent equal roles, never starting with SELF.
    """
    roles: list[TurnRole] = []
    contents: list[list[str]] = []

    for message in messages:
        text = message.stripped_text
        if not text:
            continue

        if message.is_from(bot_user_id):
            role = TurnRole.SELF
            content = text
        else:
            role = TurnRole.COUNTERPART
            content = f"{message.user.name}: {text}"

        if roles and roles[-1] == role:
            contents[-1].append(content)
        else:
            roles.append(role)
            contents.append([content])

    # Merging happens first, so a merged run of self messages drops as a unit
    start = 0
    while start < len(roles) and roles[start] == TurnRole.SELF:
        start += 1

    return [
        ConversationTurn(role=role, content="\n".join(parts))
        for role, parts in zip(roles[start:], contents[start:])
    ]


async def build_conversation_window(
    history: ConversationHistoryService,
    channel_id: str,
    bot_user_id: str,
    limit: int,
) -> list[ConversationTurn]:
    """Fetch recent channel history and fold it into conversation turns.

    Fetch errors are not handled here; they propagate to the caller.

    Args:
        history: Source of recent channel messages (newest first).
        channel_id: Channel to fetch.
        bot_user_id: The participant's own user ID.
        limit: Maximum number of messages to fetch.

    Returns:
        Conversation turns in chronological order.
    """
    fetched = await history.fetch_recent_messages(channel_id, limit)
    return fold_conversation(reversed(fetched), bot_user_id)
