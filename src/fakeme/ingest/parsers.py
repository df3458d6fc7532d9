"""Chat export parsers.

Each parser returns RawMessage records in export order.
"""

import csv
import json
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RawMessage:
    """A single exported message.

    Attributes:
        content: Message text.
        author_id: Author's platform user ID.
        timestamp: Timestamp as exported.
    """

    content: str
    author_id: str
    timestamp: str


def detect_format(path: Path) -> str:
    """Guess the export format from the input path."""
    if path.is_dir():
        return "slack"
    if path.suffix.lower() == ".csv":
        return "csv"
    return "json"


def parse_slack_export(path: Path) -> list[RawMessage]:
    """Parse a Slack workspace export.

    Accepts a single day file (a JSON list of messages) or a directory, in
    which case every ``*.json`` file below it holding a list is read in
    path order. Workspace metadata files (users.json, channels.json) are
    lists of non-message objects and are skipped by the ``ts`` check.

    Args:
        path: Day file or export directory.

    Returns:
        Messages with user, text and ts.
    """
    files = sorted(path.rglob("*.json")) if path.is_dir() else [path]

    messages: list[RawMessage] = []
    for file in files:
        with open(file, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            continue
        for entry in data:
            if not isinstance(entry, dict) or "ts" not in entry:
                continue
            if entry.get("subtype") not in (None, "thread_broadcast"):
                continue
            messages.append(
                RawMessage(
                    content=str(entry.get("text") or ""),
                    author_id=str(entry.get("user") or ""),
                    timestamp=str(entry["ts"]),
                )
            )
    return messages


def parse_chat_exporter_json(path: Path) -> list[RawMessage]:
    """Parse a DiscordChatExporter-style JSON export.

    Expected structure: {"messages": [{"author": {"id"}, "content", "timestamp"}]}
    """
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    messages = raw.get("messages") if isinstance(raw, dict) else None
    result = []
    for m in messages or []:
        if not isinstance(m, dict):
            continue
        author = m.get("author") or {}
        result.append(
            RawMessage(
                content=str(m.get("content") or ""),
                author_id=str(author.get("id") or ""),
                timestamp=str(m.get("timestamp") or ""),
            )
        )
    return result


def parse_csv_export(path: Path, user_id: str) -> list[RawMessage]:
    """Parse a personal data export CSV.

    Columns: ID,Timestamp,Contents,Attachments. There is no author
    column; every row belongs to the exporting user.
    """
    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)  # header
        return [
            RawMessage(
                content=row[2] if len(row) > 2 else "",
                author_id=user_id,
                timestamp=row[1] if len(row) > 1 else "",
            )
            for row in reader
            if any(field.strip() for field in row)
        ]


def parse_export(path: Path, export_format: str, user_id: str) -> list[RawMessage]:
    """Parse an export in the given format.

    Raises:
        ValueError: Unknown format.
    """
    if export_format == "slack":
        return parse_slack_export(path)
    if export_format == "json":
        return parse_chat_exporter_json(path)
    if export_format == "csv":
        return parse_csv_export(path, user_id)
    raise ValueError(f"Unknown export format: {export_format}")
