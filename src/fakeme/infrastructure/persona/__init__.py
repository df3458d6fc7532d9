"""Persona profile storage."""

from fakeme.infrastructure.persona.loader import (
    load_persona,
    parse_persona,
    persona_to_dict,
    save_persona,
)

__all__ = ["load_persona", "parse_persona", "persona_to_dict", "save_persona"]
