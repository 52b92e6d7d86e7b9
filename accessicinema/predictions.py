"""Static next-action predictions and per-context suggestions."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping

from .models import CommandContext, IntentName, PredictedAction

__all__ = [
    "ACTION_PREDICTIONS",
    "ASSISTANT_DEFAULT_PREDICTIONS",
    "ASSISTANT_INTENT_SUGGESTIONS",
    "ASSISTANT_SUGGESTIONS",
    "CONTEXT_SUGGESTIONS",
    "DEFAULT_PROACTIVE_HELP",
    "PROACTIVE_HELP",
    "ProactiveHelp",
    "assistant_suggestions_for",
    "predict_assistant_actions",
    "predict_next_actions",
    "proactive_help_for",
    "suggestions_for",
]


def _predictions(*rows: tuple[str, str, float]) -> tuple[PredictedAction, ...]:
    return tuple(
        PredictedAction(action=action, description=description, confidence=confidence)
        for action, description, confidence in rows
    )


ACTION_PREDICTIONS: Final[Mapping[IntentName, tuple[PredictedAction, ...]]] = MappingProxyType(
    {
        "search": _predictions(
            ("apply_filters", "Apply accessibility filters to search results", 0.8),
            ("view_details", "View detailed information about a movie", 0.7),
            ("play_content", "Start watching selected content", 0.6),
        ),
        "play": _predictions(
            ("enable_audio_description", "Turn on audio descriptions", 0.9),
            ("enable_captions", "Enable closed captions", 0.8),
            ("adjust_playback_speed", "Modify playback speed for better comprehension", 0.6),
        ),
        "pause": _predictions(
            ("resume_playback", "Resume playing the movie", 0.9),
            ("read_description", "Hear the movie description", 0.6),
            ("navigate_home", "Return to the home page", 0.4),
        ),
        "navigate": _predictions(
            ("explore_content", "Browse available content", 0.7),
            ("search_content", "Search for accessible movies", 0.6),
            ("get_help", "Access help and tutorials", 0.5),
        ),
        "help": _predictions(
            ("access_tutorials", "View accessibility tutorials", 0.8),
            ("adjust_settings", "Modify accessibility settings", 0.7),
            ("contact_support", "Get additional help from support", 0.4),
        ),
        "describe": _predictions(
            ("configure_features", "Set up accessibility features", 0.9),
            ("test_features", "Test accessibility settings", 0.8),
            ("browse_accessible_content", "Find content with specific features", 0.7),
        ),
        "filter": _predictions(
            ("view_details", "View detailed information about a movie", 0.8),
            ("clear_filters", "Remove the applied filters", 0.6),
            ("play_content", "Start watching selected content", 0.5),
        ),
        "recommend": _predictions(
            ("view_recommendations", "Browse personalized recommendations", 0.9),
            ("save_to_favorites", "Add recommended content to favorites", 0.7),
            ("adjust_preferences", "Modify recommendation preferences", 0.5),
        ),
        "unknown": (),
    }
)

CONTEXT_SUGGESTIONS: Final[Mapping[CommandContext, tuple[str, ...]]] = MappingProxyType(
    {
        CommandContext.SEARCH: (
            "Try searching for 'audio description movies'",
            "Filter by accessibility features",
            "Browse by genre with accessibility options",
            "Use voice search for hands-free browsing",
        ),
        CommandContext.PLAYER: (
            "Enable audio descriptions before playing",
            "Check caption language options",
            "Adjust volume and audio balance",
            "Use keyboard shortcuts for playback control",
        ),
        CommandContext.DETAILS: (
            "Ask to read the description aloud",
            "Ask which accessibility features are available",
            "Ask for the rating",
            "Find similar accessible movies",
        ),
        CommandContext.NAVIGATION: (
            "Learn about keyboard navigation shortcuts",
            "Set up voice commands for easier control",
            "Configure screen reader compatibility",
            "Adjust text size and contrast settings",
        ),
    }
)

ASSISTANT_SUGGESTIONS: Final[tuple[str, ...]] = (
    "Ask me about accessible movies",
    "Get help with navigation",
    "Explore accessibility features",
    "Find content recommendations",
)


def predict_next_actions(intent: IntentName) -> tuple[PredictedAction, ...]:
    """Return the fixed ranked predictions for ``intent``."""

    return ACTION_PREDICTIONS.get(intent, ())


def suggestions_for(context: CommandContext) -> tuple[str, ...]:
    return CONTEXT_SUGGESTIONS[CommandContext(context)]


ASSISTANT_DEFAULT_PREDICTIONS: Final[tuple[PredictedAction, ...]] = _predictions(
    ("explore_content", "Browse available content", 0.6),
    ("get_help", "Access help and tutorials", 0.5),
)

ASSISTANT_INTENT_SUGGESTIONS: Final[Mapping[IntentName, tuple[str, ...]]] = MappingProxyType(
    {
        "search": CONTEXT_SUGGESTIONS[CommandContext.SEARCH],
        "recommend": (
            "Explore documentaries with audio descriptions",
            "Check out highly-rated accessible movies",
            "Discover content in your preferred genres",
            "Find movies with sign language interpretation",
        ),
        "help": CONTEXT_SUGGESTIONS[CommandContext.NAVIGATION],
        "describe": (
            "Test audio description settings",
            "Configure closed caption preferences",
            "Set up braille display options",
            "Customize voice navigation commands",
        ),
        "play": CONTEXT_SUGGESTIONS[CommandContext.PLAYER],
    }
)


def predict_assistant_actions(intent: IntentName) -> tuple[PredictedAction, ...]:
    """Predictions for an assistant query; unclassified queries get a generic pair."""

    return ACTION_PREDICTIONS.get(intent) or ASSISTANT_DEFAULT_PREDICTIONS


def assistant_suggestions_for(intent: IntentName) -> tuple[str, ...]:
    return ASSISTANT_INTENT_SUGGESTIONS.get(intent, ASSISTANT_SUGGESTIONS)


@dataclass(frozen=True, slots=True)
class ProactiveHelp:
    """Canned unprompted assistance for one screen."""

    message: str
    speech_text: str
    confidence: float
    suggestions: tuple[str, ...]
    predicted_actions: tuple[PredictedAction, ...] = ()


PROACTIVE_HELP: Final[Mapping[str, ProactiveHelp]] = MappingProxyType(
    {
        CommandContext.SEARCH.value: ProactiveHelp(
            message=(
                "I notice you often search for documentaries with audio descriptions. "
                "Would you like me to show you our latest accessible documentary releases?"
            ),
            speech_text=(
                "I can help you find new documentaries with audio descriptions. "
                "Would you like to see the latest releases?"
            ),
            confidence=0.8,
            suggestions=(
                "Browse new documentaries with audio descriptions",
                "Set up alerts for new accessible content",
                "Explore documentary categories",
            ),
            predicted_actions=_predictions(
                ("browse_documentaries", "Browse documentary collection", 0.9),
                ("set_alerts", "Set up content alerts", 0.7),
            ),
        ),
        CommandContext.DETAILS.value: ProactiveHelp(
            message=(
                "Since you prefer content with audio descriptions, I've verified this movie "
                "has professional narration. Would you like me to start the audio "
                "description automatically?"
            ),
            speech_text=(
                "This movie has professional audio descriptions. Should I enable them for you?"
            ),
            confidence=0.9,
            suggestions=(
                "Enable audio description",
                "Check accessibility features",
                "Read detailed content description",
            ),
            predicted_actions=_predictions(
                ("enable_audio_description", "Turn on audio descriptions", 0.95),
                ("start_playback", "Begin watching with accessibility features", 0.8),
            ),
        ),
    }
)

DEFAULT_PROACTIVE_HELP: Final = ProactiveHelp(
    message=(
        "I'm here to help you navigate and enjoy accessible content. "
        "What would you like to do?"
    ),
    speech_text="How can I assist you with finding accessible content today?",
    confidence=0.6,
    suggestions=(
        "Get content recommendations",
        "Explore accessibility features",
        "Search for specific content",
    ),
)


def proactive_help_for(context: str) -> ProactiveHelp:
    return PROACTIVE_HELP.get(context, DEFAULT_PROACTIVE_HELP)
