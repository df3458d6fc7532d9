"""Domain services."""

from fakeme.domain.services.conversation_window import (
    build_conversation_window,
    fold_conversation,
)
from fakeme.domain.services.cooldown import CooldownTracker
from fakeme.domain.services.protocols import (
    SKIP_TOKEN,
    ConversationHistoryService,
    InstructionBuilder,
    MessagingService,
    ResponseGenerator,
)
from fakeme.domain.services.response_decision import ResponseDecision

__all__ = [
    "SKIP_TOKEN",
    "ConversationHistoryService",
    "CooldownTracker",
    "InstructionBuilder",
    "MessagingService",
    "ResponseDecision",
    "ResponseGenerator",
    "build_conversation_window",
    "fold_conversation",
]
