"""Rule-based intent classification for spoken and typed commands."""

from __future__ import annotations

from typing import Final

from .const import MATCHED_INTENT_CONFIDENCE, UNKNOWN_INTENT_CONFIDENCE
from .models import CommandContext, Intent, IntentName

__all__ = ["INTENT_TRIGGERS", "UNKNOWN_INTENT", "classify_intent"]

# Order matters: the first intent with a trigger found in the text wins, so
# "show me something to watch" is a search, not a play.
INTENT_TRIGGERS: Final[tuple[tuple[IntentName, tuple[str, ...]], ...]] = (
    ("search", ("find", "search", "look for", "show me", "get", "discover")),
    ("play", ("play", "start", "watch", "begin", "stream")),
    ("pause", ("pause", "stop", "halt", "hold on", "wait")),
    ("navigate", ("go home", "go to", "navigate", "main page", "open", "back")),
    ("help", ("help", "what can i say", "how do i", "how to", "assist")),
    ("describe", ("describe", "tell me about", "read", "narrate", "what is")),
    ("filter", ("filter", "show only", "only", "with", "that have")),
    ("recommend", ("recommend", "suggest", "what should", "similar", "like this")),
)

UNKNOWN_INTENT: Final = Intent(name="unknown", confidence=UNKNOWN_INTENT_CONFIDENCE)


def classify_intent(normalized: str, context: CommandContext | None = None) -> Intent:
    """Return the first intent whose trigger occurs in ``normalized``.

    ``context`` is accepted as a hint for callers but does not influence the
    result; the table is the same for every context.
    """

    if not normalized:
        return UNKNOWN_INTENT

    for name, triggers in INTENT_TRIGGERS:
        for trigger in triggers:
            if trigger in normalized:
                return Intent(name=name, confidence=MATCHED_INTENT_CONFIDENCE)
    return UNKNOWN_INTENT
