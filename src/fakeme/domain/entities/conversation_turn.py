"""Conversation turn entity."""

from dataclasses import dataclass
from enum import Enum


class TurnRole(Enum):
    """Speaker of a conversation turn."""

    COUNTERPART = "counterpart"
    SELF = "self"


@dataclass(frozen=True)
class ConversationTurn:
    """One role-tagged unit of conversation content.

    Attributes:
        role: Who produced the content.
        content: Turn text. Adjacent messages from the same role are
            newline-joined into a single turn.
    """

    role: TurnRole
    content: str
