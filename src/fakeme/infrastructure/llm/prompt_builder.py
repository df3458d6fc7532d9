"""Persona instruction payload builder."""

import random

from fakeme.domain.entities import PersonaProfile, StyleNotes
from fakeme.domain.services import SKIP_TOKEN
from fakeme.infrastructure.llm.templates import create_jinja_env

_MAX_PHRASES = 10


def build_style_rules(style: StyleNotes) -> list[str]:
    """Translate style statistics into plain-language writing rules.

    Args:
        style: Persona style notes.

    Returns:
        Style rules, one sentence each.
    """
    rules: list[str] = []

    if style.lowercase_dominant:
        rules.append("Write in lowercase most of the time.")
    else:
        rules.append("Use normal capitalization.")

    if style.avg_length < 50:
        rules.append("Keep messages very short (under ~50 characters typically).")
    elif style.avg_length < 100:
        rules.append("Keep messages fairly short (one or two sentences).")
    else:
        rules.append("Messages can be a few sentences long when needed.")

    if style.emoji_frequency > 0.3:
        rules.append(
            "Use emoji frequently. You use them in about a third of messages or more."
        )
    elif style.emoji_frequency > 0.1:
        rules.append("Use emoji occasionally.")
    else:
        rules.append("Rarely use emoji.")

    if style.punctuation_notes:
        rules.append(f"Punctuation style: {'; '.join(style.punctuation_notes)}.")

    if style.common_phrases:
        phrases = ", ".join(f'"{p}"' for p in style.common_phrases[:_MAX_PHRASES])
        rules.append(f"You sometimes use phrases like: {phrases}.")

    return rules


class PersonaPromptBuilder:
    """Builds the system prompt that has the model speak as the persona.

    Every call draws a fresh random subset of example messages so replies
    don't settle into repeated patterns.
    """

    def __init__(
        self,
        example_count: int = 50,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            example_count: Maximum number of example messages per prompt.
            rng: Random source for example sampling.
        """
        self._example_count = example_count
        self._rng = rng or random.Random()
        self._template = create_jinja_env().get_template("system_prompt.j2")

    def sample_examples(self, examples: tuple[str, ...]) -> list[str]:
        """Pick a random subset of example messages."""
        count = min(self._example_count, len(examples))
        return self._rng.sample(list(examples), count)

    def build(self, persona: PersonaProfile) -> str:
        """Build the instruction payload.

        Args:
            persona: Persona profile.

        Returns:
            Rendered system prompt.
        """
        return self._template.render(
            name=persona.display_name,
            style_rules=build_style_rules(persona.style_notes),
            examples=self.sample_examples(persona.example_messages),
            skip_token=SKIP_TOKEN,
        )
