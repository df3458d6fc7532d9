"""Slack event handlers."""

import logging

from slack_bolt.async_app import AsyncApp

from fakeme.application.handlers import MessageHandler
from fakeme.infrastructure.slack import SlackEventAdapter

logger = logging.getLogger(__name__)

# Message subtypes that represent a newly posted message
_NEW_MESSAGE_SUBTYPES = frozenset({None, "bot_message", "thread_broadcast"})


def is_thread_reply(event: dict) -> bool:
    """Check if a message event is a reply inside a thread.

    Thread replies are only visible through conversations.replies, so they
    are treated like a separate conversation outside the channel. Replies
    also broadcast to the channel count as channel messages.
    """
    thread_ts = event.get("thread_ts")
    if not thread_ts or thread_ts == event.get("ts"):
        return False
    return event.get("subtype") != "thread_broadcast"


def register_handlers(
    app: AsyncApp,
    message_handler: MessageHandler,
    event_adapter: SlackEventAdapter,
) -> None:
    """Register Slack event handlers.

    Args:
        app: AsyncApp instance.
        message_handler: Handler running the reply pipeline.
        event_adapter: Adapter for converting events to entities.
    """

    @app.event("app_mention")
    async def handle_app_mention(event: dict) -> None:
        """Handle app_mention events (no-op).

        This handler exists to acknowledge app_mention events and suppress
        slack-bolt warnings. The actual processing is done by handle_message
        which receives the same message event.
        """
        logger.debug("Received app_mention event: %s", event.get("ts"))

    @app.event("message")
    async def handle_message(event: dict) -> None:
        """Handle message events.

        Converts newly posted messages and passes them to the reply
        pipeline. Edits, deletions, other subtypes and replies inside
        threads are ignored.

        Args:
            event: Slack event payload.
        """
        subtype = event.get("subtype")
        if subtype not in _NEW_MESSAGE_SUBTYPES:
            logger.debug("Ignoring message subtype %s", subtype)
            return

        if is_thread_reply(event):
            logger.debug("Ignoring thread reply %s", event.get("ts"))
            return

        logger.debug(
            "Processing message event: ts=%s, channel=%s",
            event.get("ts"),
            event.get("channel"),
        )

        try:
            message = await event_adapter.to_message(event)
        except Exception:
            logger.exception("Error converting event to message")
            return

        await message_handler.handle(message)
