"""Event handlers package."""

from fakeme.application.handlers.message_handler import MessageHandler

__all__ = ["MessageHandler"]
