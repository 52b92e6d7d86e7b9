"""Constants for the AccessiCinema command engine."""

from types import MappingProxyType

TITLE = "AccessiCinema"

MATCHED_INTENT_CONFIDENCE = 0.8
UNKNOWN_INTENT_CONFIDENCE = 0.0

FEATURE_AUDIO_DESCRIPTION = "audio_description"
FEATURE_CLOSED_CAPTIONS = "closed_captions"
FEATURE_SIGN_LANGUAGE = "sign_language"
FEATURE_NARRATION = "narration"

ACCESSIBILITY_WEIGHTS = MappingProxyType(
    {
        FEATURE_AUDIO_DESCRIPTION: 0.3,
        FEATURE_CLOSED_CAPTIONS: 0.3,
        FEATURE_SIGN_LANGUAGE: 0.2,
        FEATURE_NARRATION: 0.2,
    }
)

DEFAULT_CELLS_PER_LINE = 40
MAX_CONTRACTION_LENGTH = 10
MIN_CONTRACTION_LENGTH = 2

DEFAULT_SEARCH_LIMIT = 20
DEFAULT_AI_PROVIDER = "openai"
PROVIDER_FALLBACK_CONFIDENCE = 0.1
CONVERSATION_HISTORY_WINDOW = 5
DEFAULT_TELEMETRY_MAX_EVENTS = 50
