"""Shared data models for the AccessiCinema command engine."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


__all__ = [
    "AccessibilityFeaturesPayload",
    "AccessibilityReport",
    "AccessibilityScore",
    "AssistantPayload",
    "AssistantRequest",
    "BrailleDocument",
    "BrailleGrade",
    "BrailleRequest",
    "CaptionsPayload",
    "CommandContext",
    "CommandRequest",
    "CommandResponse",
    "ContentItem",
    "ContentSummary",
    "ConversationTurn",
    "DescriptionPayload",
    "EntitySet",
    "FilterPayload",
    "Intent",
    "IntentName",
    "PredictedAction",
    "RatingPayload",
    "RecommendPayload",
    "ResponsePayload",
    "SearchFilters",
    "SearchPayload",
    "SimilarPayload",
    "UserPreferences",
    "Utterance",
    "VolumePayload",
]

IntentName = Literal[
    "search",
    "play",
    "pause",
    "navigate",
    "help",
    "describe",
    "filter",
    "recommend",
    "unknown",
]


class CommandContext(StrEnum):
    """Caller-supplied mode selecting the routing table."""

    SEARCH = "search"
    PLAYER = "player"
    DETAILS = "details"
    NAVIGATION = "navigation"


class BrailleGrade(StrEnum):
    """Braille transliteration grade."""

    GRADE1 = "grade1"
    GRADE2 = "grade2"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class Utterance(_FrozenModel):
    """Command text as received plus its normalized form."""

    raw: str
    normalized: str

    @classmethod
    def from_text(cls, text: str) -> "Utterance":
        raw = (text or "").strip()
        return cls(raw=raw, normalized=" ".join(raw.lower().split()))


class Intent(_FrozenModel):
    """Discrete intent with its fixed classification confidence."""

    name: IntentName
    confidence: float = Field(ge=0.0, le=1.0)


class EntitySet(_FrozenModel):
    """Vocabulary items found in a normalized command."""

    accessibility_features: frozenset[str] = frozenset()
    genres: frozenset[str] = frozenset()
    action_keywords: frozenset[str] = frozenset()

    def is_empty(self) -> bool:
        return not (self.accessibility_features or self.genres or self.action_keywords)


class ContentItem(_FrozenModel):
    """Read-only catalog entry owned by the content store."""

    id: int
    title: str
    overview: str | None = None
    genres: tuple[str, ...] = ()
    audio_description: bool = False
    closed_captions: bool = False
    sign_language: bool = False
    narrated_description: str | None = None
    vote_average: float = Field(default=0.0, ge=0.0, le=10.0)
    vote_count: int = Field(default=0, ge=0)

    @property
    def has_narration(self) -> bool:
        return bool(self.narrated_description and self.narrated_description.strip())


class ContentSummary(_FrozenModel):
    """Compact view of a content item used in search payloads."""

    id: int
    title: str
    overview: str | None = None
    accessibility_score: float = Field(ge=0.0, le=1.0)


class SearchFilters(_FrozenModel):
    """Filters handed to ``ContentStore.search``."""

    query: str = ""
    genres: frozenset[str] = frozenset()
    accessibility_features: frozenset[str] = frozenset()
    limit: int = Field(default=20, ge=1)


class PredictedAction(_FrozenModel):
    """Ranked guess at what the user will do next."""

    action: str
    description: str
    confidence: float = Field(ge=0.0, le=1.0)


class SearchPayload(_FrozenModel):
    kind: Literal["search"] = "search"
    query: str
    results: tuple[ContentSummary, ...] = ()


class FilterPayload(_FrozenModel):
    kind: Literal["filter"] = "filter"
    filter: str


class RecommendPayload(_FrozenModel):
    kind: Literal["recommend"] = "recommend"
    genres: tuple[str, ...] = ()
    accessibility_features: tuple[str, ...] = ()


class VolumePayload(_FrozenModel):
    kind: Literal["volume"] = "volume"
    direction: Literal["increase", "decrease", "set"]


class CaptionsPayload(_FrozenModel):
    kind: Literal["captions"] = "captions"
    enable: bool


class DescriptionPayload(_FrozenModel):
    kind: Literal["read_description"] = "read_description"
    title: str
    description: str | None = None


class AccessibilityFeaturesPayload(_FrozenModel):
    kind: Literal["accessibility_features"] = "accessibility_features"
    features: tuple[str, ...] = ()


class RatingPayload(_FrozenModel):
    kind: Literal["rating"] = "rating"
    rating: float
    vote_count: int


class SimilarPayload(_FrozenModel):
    kind: Literal["find_similar"] = "find_similar"
    content_id: int
    genres: tuple[str, ...] = ()


class AssistantPayload(_FrozenModel):
    kind: Literal["assistant"] = "assistant"
    provider: str
    follow_up_questions: tuple[str, ...] = ()
    details: dict[str, Any] = Field(default_factory=dict)


ResponsePayload = Annotated[
    Union[
        SearchPayload,
        FilterPayload,
        RecommendPayload,
        VolumePayload,
        CaptionsPayload,
        DescriptionPayload,
        AccessibilityFeaturesPayload,
        RatingPayload,
        SimilarPayload,
        AssistantPayload,
    ],
    Field(discriminator="kind"),
]


class CommandResponse(_FrozenModel):
    """Structured result of interpreting a command.

    ``intent`` and ``confidence`` report the classifier's reading of the
    utterance. ``routed_intent`` is the intent of the action that was actually
    taken and keys ``predicted_next_actions``; the two differ when a context
    table acts on a phrase the classifier does not know, such as
    "enable captions" in the player.
    """

    action: str
    intent: IntentName = "unknown"
    routed_intent: IntentName = "unknown"
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    response: str
    speech_text: str
    data: ResponsePayload | None = None
    navigation_instructions: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    predicted_next_actions: tuple[PredictedAction, ...] = ()


class BrailleDocument(_FrozenModel):
    """Rendered Braille for a piece of text."""

    text: str
    grade: BrailleGrade
    cells_per_line: int = Field(ge=1)
    lines: tuple[str, ...] = ()


class AccessibilityScore(_FrozenModel):
    content_id: int
    score: float = Field(ge=0.0, le=1.0)


class AccessibilityReport(_FrozenModel):
    """Score plus the feature analysis behind it."""

    content_id: int
    score: float = Field(ge=0.0, le=1.0)
    features: tuple[str, ...] = ()
    improvements: tuple[str, ...] = ()
    suitable_for: tuple[str, ...] = ()


class CommandRequest(_FrozenModel):
    """Request payload for the interpret endpoint."""

    utterance: str
    context: CommandContext = CommandContext.NAVIGATION
    content_id: int | None = None
    user_id: str | None = None


class BrailleRequest(_FrozenModel):
    text: str
    grade: BrailleGrade = BrailleGrade.GRADE1
    cells_per_line: int | None = Field(default=None, ge=1)


class UserPreferences(_FrozenModel):
    """Assistant preferences supplied by the caller."""

    ai_provider: Literal["openai", "anthropic", "gemini", "perplexity"] | None = None
    voice_enabled: bool = True
    accessibility_needs: tuple[str, ...] = ()
    preferred_genres: tuple[str, ...] = ()


class ConversationTurn(_FrozenModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: str | None = None


class AssistantRequest(_FrozenModel):
    """Request payload for the assistant endpoint."""

    query: str
    context: Literal["search", "navigation", "recommendation", "accessibility", "general"] = (
        "general"
    )
    user_id: str | None = None
    preferences: UserPreferences | None = None
    conversation_history: tuple[ConversationTurn, ...] = ()
