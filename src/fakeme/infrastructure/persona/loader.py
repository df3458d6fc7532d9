"""Persona profile loading."""

import json
import logging
from pathlib import Path
from typing import Any

from fakeme.domain.entities import PersonaProfile, StyleNotes
from fakeme.domain.exceptions import PersonaLoadError

logger = logging.getLogger(__name__)


def _parse_style_notes(data: Any) -> StyleNotes:
    if not isinstance(data, dict):
        raise PersonaLoadError("persona: missing or invalid styleNotes")

    avg_length = data.get("avgLength")
    if isinstance(avg_length, bool) or not isinstance(avg_length, (int, float)):
        raise PersonaLoadError("persona: missing or invalid styleNotes")

    return StyleNotes(
        avg_length=avg_length,
        emoji_frequency=float(data.get("emojiFrequency", 0.0)),
        lowercase_dominant=bool(data.get("lowercaseDominant", False)),
        punctuation_notes=tuple(str(n) for n in data.get("punctuationNotes", [])),
        common_phrases=tuple(str(p) for p in data.get("commonPhrases", [])),
    )


def parse_persona(data: Any) -> PersonaProfile:
    """Validate raw persona JSON and build a PersonaProfile.

    Args:
        data: Decoded JSON document.

    Returns:
        PersonaProfile instance.

    Raises:
        PersonaLoadError: If a required field is missing or invalid.
    """
    if not isinstance(data, dict):
        raise PersonaLoadError("persona: document must be a JSON object")

    display_name = data.get("displayName")
    if not display_name or not isinstance(display_name, str):
        raise PersonaLoadError("persona: missing or invalid displayName")

    examples = data.get("exampleMessages")
    if not isinstance(examples, list) or not examples:
        raise PersonaLoadError("persona: exampleMessages must be a non-empty array")

    return PersonaProfile(
        display_name=display_name,
        example_messages=tuple(str(m) for m in examples),
        style_notes=_parse_style_notes(data.get("styleNotes")),
    )


def load_persona(path: str | Path) -> PersonaProfile:
    """Load the persona profile produced by the ingestion tool.

    Args:
        path: Path to persona JSON.

    Returns:
        PersonaProfile instance.

    Raises:
        FileNotFoundError: File does not exist.
        PersonaLoadError: Invalid JSON or missing fields.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise PersonaLoadError(f"persona: invalid JSON in {path}: {e}") from e

    persona = parse_persona(data)
    logger.info(
        'Loaded persona "%s" with %d example messages',
        persona.display_name,
        len(persona.example_messages),
    )
    return persona


def persona_to_dict(persona: PersonaProfile) -> dict[str, Any]:
    """Convert a PersonaProfile to its JSON document form."""
    style = persona.style_notes
    return {
        "displayName": persona.display_name,
        "exampleMessages": list(persona.example_messages),
        "styleNotes": {
            "avgLength": style.avg_length,
            "emojiFrequency": style.emoji_frequency,
            "lowercaseDominant": style.lowercase_dominant,
            "punctuationNotes": list(style.punctuation_notes),
            "commonPhrases": list(style.common_phrases),
        },
    }


def save_persona(persona: PersonaProfile, path: str | Path) -> Path:
    """Write a persona profile as pretty-printed JSON.

    Parent directories are created as needed.

    Returns:
        The resolved output path.
    """
    path = Path(path).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(persona_to_dict(persona), f, indent=2, ensure_ascii=False)
    return path
