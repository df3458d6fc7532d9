"""Message filtering, sampling and style analysis."""

import math
import random
import re
from collections import Counter
from collections.abc import Iterable

from fakeme.domain.entities import StyleNotes
from fakeme.ingest.parsers import RawMessage

MIN_LENGTH = 10
MAX_LENGTH = 300
MIN_PHRASE_COUNT = 5
MAX_PHRASES = 20

URL_ONLY = re.compile(r"^https?://\S+$")
BOT_COMMAND = re.compile(r"^[!./]")
# Unicode pictographs plus Slack :shortcode: emoji
EMOJI = re.compile(
    r"[\U0001F300-\U0001F5FF\U0001F600-\U0001F64F\U0001F680-\U0001F6FF"
    r"\U0001F700-\U0001F77F\U0001F900-\U0001F9FF\U0001FA70-\U0001FAFF"
    r"\u2600-\u27bf]"
    r"|:[a-z0-9_+-]+:"
)
ENDS_ALNUM = re.compile(r"[a-zA-Z0-9]$")


def filter_messages(messages: Iterable[RawMessage], user_id: str) -> list[str]:
    """Keep the user's messages that are useful for style analysis.

    Drops messages by other authors, empty messages, bare URLs, bot
    commands, and anything shorter than 10 or longer than 300 characters.
    """
    result = []
    for message in messages:
        if message.author_id != user_id:
            continue
        text = message.content.strip()
        if not MIN_LENGTH <= len(text) <= MAX_LENGTH:
            continue
        if URL_ONLY.match(text) or BOT_COMMAND.match(text):
            continue
        result.append(text)
    return result


def sample_messages(
    messages: list[str],
    count: int,
    rng: random.Random | None = None,
) -> list[str]:
    """Systematically sample messages for temporal variety.

    Takes every Nth message starting from a random offset.
    """
    if len(messages) <= count:
        return list(messages)

    rng = rng or random.Random()
    step = len(messages) / count
    offset = rng.random() * step
    return [messages[math.floor(offset + i * step)] for i in range(count)]


def _starts_lowercase(text: str) -> bool:
    first = text[0]
    return first == first.lower() and first != first.upper()


def _ratio(messages: list[str], predicate) -> float:
    return sum(1 for m in messages if predicate(m)) / len(messages)


def compute_style_notes(messages: list[str]) -> StyleNotes:
    """Compute style statistics over a non-empty list of messages.

    Raises:
        ValueError: If messages is empty.
    """
    if not messages:
        raise ValueError("Cannot analyze style of zero messages")

    total = len(messages)
    avg_length = round(sum(len(m) for m in messages) / total)
    emoji_frequency = round(_ratio(messages, lambda m: bool(EMOJI.search(m))), 2)
    lowercase_dominant = _ratio(messages, _starts_lowercase) > 0.6

    punctuation_notes = []
    if _ratio(messages, lambda m: bool(ENDS_ALNUM.search(m))) > 0.5:
        punctuation_notes.append("often omits ending punctuation")
    if _ratio(messages, lambda m: m.endswith(".")) > 0.3:
        punctuation_notes.append("frequently ends with periods")
    if _ratio(messages, lambda m: m.endswith("!")) > 0.15:
        punctuation_notes.append("uses exclamation marks often")
    if _ratio(messages, lambda m: m.endswith("?")) > 0.2:
        punctuation_notes.append("asks lots of questions")

    return StyleNotes(
        avg_length=avg_length,
        emoji_frequency=emoji_frequency,
        lowercase_dominant=lowercase_dominant,
        punctuation_notes=tuple(punctuation_notes),
        common_phrases=tuple(find_common_phrases(messages)),
    )


def find_common_phrases(messages: Iterable[str]) -> list[str]:
    """Find word bigrams used at least five times, most frequent first."""
    counts: Counter[str] = Counter()
    for message in messages:
        words = message.lower().split()
        counts.update(f"{a} {b}" for a, b in zip(words, words[1:]))

    return [
        phrase
        for phrase, count in counts.most_common(MAX_PHRASES)
        if count >= MIN_PHRASE_COUNT
    ]
