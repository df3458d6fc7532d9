"""Persona profile entity."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StyleNotes:
    """Style statistics computed from the persona's chat history.

    Attributes:
        avg_length: Average message length in characters.
        emoji_frequency: Ratio (0-1) of messages containing emoji.
        lowercase_dominant: Whether messages usually start lowercase.
        punctuation_notes: Observed punctuation habits.
        common_phrases: Frequently used short phrases.
    """

    avg_length: float
    emoji_frequency: float = 0.0
    lowercase_dominant: bool = False
    punctuation_notes: tuple[str, ...] = field(default_factory=tuple)
    common_phrases: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PersonaProfile:
    """Persona profile produced by the ingestion tool.

    Attributes:
        display_name: Name the persona speaks as.
        example_messages: Representative real messages (never empty).
        style_notes: Derived style statistics.
    """

    display_name: str
    example_messages: tuple[str, ...]
    style_notes: StyleNotes
