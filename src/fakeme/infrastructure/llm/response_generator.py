"""LLM response generator."""

import logging
from collections.abc import Sequence

from fakeme.domain.entities import ConversationTurn, TurnRole
from fakeme.infrastructure.llm.client import LLMClient

logger = logging.getLogger(__name__)

_API_ROLES = {
    TurnRole.COUNTERPART: "user",
    TurnRole.SELF: "assistant",
}


class LiteLLMResponseGenerator:
    """LiteLLM-based ResponseGenerator implementation.

    Sends the persona instructions as the system message followed by the
    conversation window as alternating user/assistant messages.
    """

    def __init__(
        self,
        client: LLMClient,
        *,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the generator.

        Args:
            client: LLMClient instance.
            debug_llm_messages: If True, log LLM messages at INFO level.
        """
        self._client = client
        self._debug_llm_messages = debug_llm_messages

    async def generate(
        self,
        instruction_payload: str,
        conversation: Sequence[ConversationTurn],
    ) -> str | None:
        """Generate a response.

        Args:
            instruction_payload: System instructions describing the persona.
            conversation: Conversation window, oldest turn first.

        Returns:
            Generated text (stripped), or None if nothing usable came back.

        Raises:
            LLMError: If response generation fails.
        """
        if not conversation:
            return None

        messages = self.build_messages(instruction_payload, conversation)

        if self._should_log():
            self._log_messages(messages)

        response = await self._client.complete(messages)

        if self._should_log():
            self._log_response(response)

        if not response:
            return None
        return response.strip() or None

    @staticmethod
    def build_messages(
        instruction_payload: str,
        conversation: Sequence[ConversationTurn],
    ) -> list[dict[str, str]]:
        """Convert the instructions and turns into OpenAI-format messages."""
        messages = [{"role": "system", "content": instruction_payload}]
        messages.extend(
            {"role": _API_ROLES[turn.role], "content": turn.content}
            for turn in conversation
        )
        return messages

    def _should_log(self) -> bool:
        """Check if logging should occur."""
        return self._debug_llm_messages or logger.isEnabledFor(logging.DEBUG)

    def _log_messages(self, messages: list[dict[str, str]]) -> None:
        """Log LLM request messages."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Request Messages ===")
        for i, msg in enumerate(messages):
            log_func("[%d] role=%s", i, msg.get("role", "unknown"))
            log_func("    content: %s", msg.get("content", ""))
        log_func("=== End of Messages ===")

    def _log_response(self, response: str | None) -> None:
        """Log LLM response."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Response ===")
        log_func("response: %s", response)
        log_func("=== End of Response ===")
