"""Build a persona profile from an exported chat history.

Usage:
    python -m fakeme.ingest --input data/raw/export --user-id U0123456789
    python -m fakeme.ingest --input data/raw/export.json --user-id 1234 --format json
    python -m fakeme.ingest --input data/raw/messages.csv --user-id 1234
"""

import argparse
import sys
from pathlib import Path

import yaml

from fakeme.domain.entities import PersonaProfile
from fakeme.infrastructure.persona import save_persona
from fakeme.ingest.analysis import (
    MAX_LENGTH,
    MIN_LENGTH,
    compute_style_notes,
    filter_messages,
    sample_messages,
)
from fakeme.ingest.parsers import detect_format, parse_export

DEFAULT_NAME = "Unknown"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fakeme-ingest",
        description="Process a chat export into a persona profile",
    )
    parser.add_argument(
        "--input", required=True, type=Path, help="Export file or directory"
    )
    parser.add_argument("--user-id", required=True, help="User ID to imitate")
    parser.add_argument(
        "--format",
        choices=["slack", "json", "csv"],
        help="Export format (default: detected from the input path)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("data/persona.json"),
        help="Output path (default: data/persona.json)",
    )
    parser.add_argument(
        "--sample-size",
        type=int,
        default=500,
        help="Number of example messages to keep (default: 500)",
    )
    parser.add_argument("--name", help="Display name (default: persona.name in config)")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Config file to read the persona name from (default: config.yaml)",
    )
    return parser


def resolve_display_name(name: str | None, config_path: Path) -> str:
    """Pick the persona display name.

    Uses the explicit name if given, then persona.name from the config
    file, then "Unknown".
    """
    if name:
        return name
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return (data.get("persona") or {}).get("name") or DEFAULT_NAME
    except (OSError, yaml.YAMLError, AttributeError):
        print(
            f"Could not read {config_path} for persona name, using '{DEFAULT_NAME}'",
            file=sys.stderr,
        )
        return DEFAULT_NAME


def main(argv: list[str] | None = None) -> int:
    """Run the ingestion tool.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    export_format = args.format or detect_format(args.input)

    print(f"Processing {export_format.upper()} export: {args.input}")
    print(f"Filtering for user ID: {args.user_id}")

    raw = parse_export(args.input, export_format, args.user_id)
    print(f"Parsed {len(raw)} total messages")

    filtered = filter_messages(raw, args.user_id)
    print(
        f"{len(filtered)} messages after filtering "
        f"({MIN_LENGTH}-{MAX_LENGTH} chars, no URLs/commands)"
    )
    if not filtered:
        print(
            "No messages matched. Check the user ID and export format.",
            file=sys.stderr,
        )
        return 1

    sampled = sample_messages(filtered, args.sample_size)
    print(f"Sampled {len(sampled)} messages")

    # Style is computed over everything that passed the filter
    style = compute_style_notes(filtered)
    print(f"Style: avg {style.avg_length} chars, {style.emoji_frequency} emoji rate")
    print(f"  Lowercase dominant: {style.lowercase_dominant}")
    punctuation = ", ".join(style.punctuation_notes) or "no strong patterns"
    print(f"  Punctuation: {punctuation}")
    print(f"  Common phrases: {', '.join(style.common_phrases[:5])}")

    persona = PersonaProfile(
        display_name=resolve_display_name(args.name, args.config),
        example_messages=tuple(sampled),
        style_notes=style,
    )
    output_path = save_persona(persona, args.output)
    print(f"\nWrote persona to {output_path}")
    return 0
