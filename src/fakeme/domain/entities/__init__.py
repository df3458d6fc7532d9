"""Domain entities."""

from fakeme.domain.entities.channel import Channel
from fakeme.domain.entities.conversation_turn import ConversationTurn, TurnRole
from fakeme.domain.entities.message import Message
from fakeme.domain.entities.persona import PersonaProfile, StyleNotes
from fakeme.domain.entities.user import User

__all__ = [
    "Channel",
    "ConversationTurn",
    "Message",
    "PersonaProfile",
    "StyleNotes",
    "TurnRole",
    "User",
]
