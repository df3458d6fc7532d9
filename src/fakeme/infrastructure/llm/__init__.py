"""LLM integration."""

from fakeme.infrastructure.llm.client import LLMClient
from fakeme.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMRateLimitError,
)
from fakeme.infrastructure.llm.prompt_builder import (
    PersonaPromptBuilder,
    build_style_rules,
)
from fakeme.infrastructure.llm.response_generator import LiteLLMResponseGenerator

__all__ = [
    "LLMAuthenticationError",
    "LLMClient",
    "LLMError",
    "LLMRateLimitError",
    "LiteLLMResponseGenerator",
    "PersonaPromptBuilder",
    "build_style_rules",
]
