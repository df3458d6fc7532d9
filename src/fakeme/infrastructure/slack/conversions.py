"""Conversion of Slack message payloads to domain entities."""

from datetime import datetime, timezone

from fakeme.domain.entities import Channel, Message, User
from fakeme.infrastructure.slack.users import SlackUserDirectory

# Conversation types that are private conversations rather than channels
DIRECT_CHANNEL_TYPES = frozenset({"im", "mpim"})


async def resolve_author(payload: dict, users: SlackUserDirectory) -> User:
    """Resolve the author of a Slack message payload.

    Messages posted by integrations may carry only a bot_id; those are
    attributed to an automated user named after the integration.

    Args:
        payload: Slack message payload.
        users: User directory for looking up human authors.

    Returns:
        User entity.
    """
    user_id = payload.get("user")
    flagged_bot = (
        bool(payload.get("bot_id")) or payload.get("subtype") == "bot_message"
    )

    if user_id:
        user = await users.get_user(user_id)
        if flagged_bot and not user.is_bot:
            return User(id=user.id, name=user.name, is_bot=True)
        return user

    bot_id = payload.get("bot_id", "")
    bot_name = (payload.get("bot_profile") or {}).get("name") or payload.get(
        "username", "bot"
    )
    return User(id=bot_id, name=bot_name, is_bot=True)


def to_timestamp(ts: str) -> datetime:
    """Convert a Slack ts string to an aware datetime."""
    return datetime.fromtimestamp(float(ts), tz=timezone.utc)


async def payload_to_message(
    payload: dict,
    channel: Channel,
    users: SlackUserDirectory,
) -> Message:
    """Convert a Slack message payload to a Message entity.

    Args:
        payload: Slack message payload (event or history entry).
        channel: Channel the message belongs to.
        users: User directory for author lookup.

    Returns:
        Message entity.
    """
    return Message(
        id=payload["ts"],
        channel=channel,
        user=await resolve_author(payload, users),
        text=payload.get("text") or "",
        timestamp=to_timestamp(payload["ts"]),
    )
