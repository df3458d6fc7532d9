"""Slack integration."""

from fakeme.infrastructure.slack.client import SlackAppRunner, create_slack_app
from fakeme.infrastructure.slack.event_adapter import SlackEventAdapter
from fakeme.infrastructure.slack.history import SlackConversationHistoryService
from fakeme.infrastructure.slack.messaging import SlackMessagingService
from fakeme.infrastructure.slack.users import SlackUserDirectory

__all__ = [
    "SlackAppRunner",
    "SlackConversationHistoryService",
    "SlackEventAdapter",
    "SlackMessagingService",
    "SlackUserDirectory",
    "create_slack_app",
]
