"""Request composition for drift analysis.

Turns the user's journal entries into the single user message sent to the
completion endpoint, alongside the fixed system prompt.
"""

import logging
from typing import Iterable

from tonedrift.errors import ValidationError
from tonedrift.models.entry import JournalEntry

logger = logging.getLogger(__name__)


MIN_ENTRIES = 2

ENTRY_SEPARATOR = "\n\n---\n\n"

USER_MESSAGE_PREFIX = "Analyze these journal entries for emotional drift and pattern shifts:\n\n"

NOT_ENOUGH_ENTRIES = "Please add at least 2 journal entries with content to detect patterns."


SYSTEM_PROMPT = """You are an expert emotional intelligence analyst specializing in longitudinal emotional pattern detection from personal journal entries.

Your job is to analyze a sequence of journal entries and detect:
- The emotional tone and score of each entry
- Long-term emotional drift trends (how emotions evolve over time)
- Significant pattern shifts (sudden changes, turning points, cycles)
- Recurring emotional themes and triggers

Scoring scale: -10 (deeply negative/distressed) to +10 (deeply positive/joyful). 0 is neutral.

Return ONLY a valid JSON object — no markdown, no explanation, just raw JSON — with this exact structure:
{
  "overall_trajectory": "A short descriptive arc title (e.g. 'Gradual Decline', 'Recovery Arc', 'Emotional Volatility', 'Stable Growth', 'Burnout then Rebound')",
  "drift_type": "exactly one of: Stable | Gradual Positive | Gradual Negative | Volatile | V-Shape Recovery | Inverted V-Shape | Cyclical",
  "entries": [
    {
      "entry_number": 1,
      "score": 4,
      "dominant_emotion": "hopeful",
      "emotion_tags": ["optimistic", "anxious", "motivated"],
      "summary": "1-2 sentence emotional summary of what this specific entry reveals emotionally."
    }
  ],
  "pattern_shifts": [
    {
      "between_entries": "2 → 3",
      "direction": "negative",
      "magnitude": 7,
      "description": "Sharp emotional decline — likely triggered by the stress referenced around work deadlines."
    }
  ],
  "key_themes": ["loneliness", "self-doubt", "growth", "work stress", "hope"],
  "drift_summary": "Write 3-4 sentences analyzing the emotional journey as a whole — what patterns emerged, what the drift reveals about the person's mental state, and what the trajectory suggests going forward.",
  "wellbeing_indicator": "exactly one of: Improving | Stable | Declining | Concerning | Mixed"
}"""


def qualifying_entries(entries: Iterable[JournalEntry]) -> list[JournalEntry]:
    """Keep entries with non-blank text, in their original order."""
    return [e for e in entries if e.has_content]


def format_entry(number: int, entry: JournalEntry) -> str:
    """Render one entry as a numbered block.

    Args:
        number: 1-based position among the qualifying entries.
        entry: The journal entry.

    Returns:
        Header line (with date when present) followed by the trimmed text.
    """
    header = f"Entry {number}"
    if entry.date:
        header += f" [{entry.date}]"
    return f"{header}:\n{entry.text.strip()}"


def compose_payload(entries: Iterable[JournalEntry]) -> str:
    """Serialize qualifying entries into a single text block.

    Args:
        entries: All entries, blank ones included.

    Returns:
        Numbered entry blocks joined by the separator.

    Raises:
        ValidationError: If fewer than two entries have content.
    """
    valid = qualifying_entries(entries)
    if len(valid) < MIN_ENTRIES:
        raise ValidationError(NOT_ENOUGH_ENTRIES)

    logger.debug("Composing payload from %d entries", len(valid))
    return ENTRY_SEPARATOR.join(
        format_entry(i, entry) for i, entry in enumerate(valid, start=1)
    )


def build_user_message(payload: str) -> str:
    """Prefix the entry block with the fixed analysis instruction."""
    return f"{USER_MESSAGE_PREFIX}{payload}"


def compose_request(entries: Iterable[JournalEntry]) -> tuple[str, str]:
    """Build the (system, user) message pair for one analysis."""
    return SYSTEM_PROMPT, build_user_message(compose_payload(entries))
