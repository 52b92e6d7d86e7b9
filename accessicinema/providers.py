"""Language-model provider contract, stub providers and the assistant facade."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from types import MappingProxyType
from typing import Any, Final, Mapping, Protocol, Sequence

from jsonschema import ValidationError, validate
from pydantic import BaseModel, ConfigDict, Field

from .const import (
    CONVERSATION_HISTORY_WINDOW,
    DEFAULT_AI_PROVIDER,
    PROVIDER_FALLBACK_CONFIDENCE,
    TITLE,
)
from .intents import classify_intent
from .models import (
    AssistantPayload,
    AssistantRequest,
    CommandResponse,
    ConversationTurn,
    UserPreferences,
    Utterance,
)
from .predictions import (
    assistant_suggestions_for,
    predict_assistant_actions,
    proactive_help_for,
)

__all__ = [
    "AIProvider",
    "AssistantService",
    "ProviderFailure",
    "ProviderPayload",
    "ProviderResult",
    "StubProvider",
    "build_conversation_context",
    "build_system_context",
    "default_providers",
]

_LOGGER = logging.getLogger(__name__)


class ProviderFailure(RuntimeError):
    """Raised by providers that cannot answer; never escapes the assistant."""


class ProviderPayload(BaseModel):
    """Answer returned by a language-model provider."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    response: str
    action: str | None = None
    confidence: float = Field(ge=0.0, le=1.0)
    follow_up_questions: tuple[str, ...] = ()
    speech_text: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


PAYLOAD_SCHEMA: Final = ProviderPayload.model_json_schema(mode="validation")


@dataclass(frozen=True, slots=True)
class ProviderResult:
    """Explicit success/failure outcome of a provider call."""

    payload: ProviderPayload | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.payload is not None

    @classmethod
    def success(cls, payload: ProviderPayload | Mapping[str, Any]) -> "ProviderResult":
        model = (
            payload
            if isinstance(payload, ProviderPayload)
            else ProviderPayload.model_validate(dict(payload))
        )
        return cls(payload=model)

    @classmethod
    def failure(cls, error: Exception | str) -> "ProviderResult":
        return cls(error=str(error) or type(error).__name__)


class AIProvider(Protocol):
    """Pluggable provider contract."""

    name: str

    async def complete(
        self, prompt: str, context: str
    ) -> ProviderResult | Mapping[str, Any]:  # pragma: no cover - Protocol
        """Return an answer for ``prompt`` given the assistant ``context``."""


class StubProvider:
    """Provider that answers every prompt with a fixed payload."""

    def __init__(self, name: str, payload: Mapping[str, Any]) -> None:
        self.name = name
        self._payload = dict(payload)

    async def complete(self, prompt: str, context: str) -> ProviderResult:
        return ProviderResult.success(self._payload)


_STUB_PAYLOADS: Final[Mapping[str, Mapping[str, Any]]] = MappingProxyType(
    {
        "openai": {
            "response": (
                "I can help you find accessible movies with audio descriptions and closed "
                "captions. What type of content are you interested in?"
            ),
            "action": "search_assistance",
            "confidence": 0.9,
            "follow_up_questions": [
                "What genre do you prefer?",
                "Do you need specific accessibility features?",
                "Are you looking for recent releases?",
            ],
        },
        "anthropic": {
            "response": (
                "I understand you're looking for accessible content. Let me help you navigate "
                "our collection with detailed audio descriptions."
            ),
            "action": "navigation_assistance",
            "confidence": 0.88,
            "follow_up_questions": [
                "Would you like me to read movie descriptions aloud?",
                "Should I focus on content with professional narration?",
                "Do you prefer content with sign language interpretation?",
            ],
        },
        "gemini": {
            "response": (
                "I can provide comprehensive assistance with finding and enjoying accessible "
                "media content. What would you like to explore?"
            ),
            "action": "general_assistance",
            "confidence": 0.87,
            "follow_up_questions": [
                "Are you new to accessible media?",
                "Do you have specific accessibility requirements?",
                "Would you like a guided tour of our features?",
            ],
        },
        "perplexity": {
            "response": (
                "I can search for the most current accessible content and provide real-time "
                "information about availability and features."
            ),
            "action": "search_assistance",
            "confidence": 0.92,
            "follow_up_questions": [
                "Are you looking for newly released content?",
                "Do you want information about upcoming accessible releases?",
                "Should I check for the latest accessibility feature updates?",
            ],
        },
    }
)


def default_providers() -> dict[str, AIProvider]:
    """Return one stub provider per supported backend."""

    return {name: StubProvider(name, payload) for name, payload in _STUB_PAYLOADS.items()}


_BASE_CONTEXT: Final = (
    f"You are an AI assistant for {TITLE}, a platform dedicated to accessible media content.\n"
    "Your primary goal is to help users find and enjoy movies, documentaries, and other "
    "content with comprehensive accessibility features.\n\n"
    "Key capabilities:\n"
    "- Help users find content with audio descriptions, closed captions, and sign language "
    "interpretation\n"
    "- Provide detailed content descriptions and narrations\n"
    "- Assist with navigation and accessibility features\n"
    "- Offer personalized recommendations based on accessibility needs\n"
    "- Support voice interactions and screen reader compatibility"
)

_CONTEXT_FOCUS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "search": (
            "Focus on helping users search for and discover accessible content. "
            "Provide specific recommendations and filtering options."
        ),
        "navigation": (
            "Help users navigate the platform efficiently. "
            "Provide clear instructions and anticipate their next actions."
        ),
        "recommendation": (
            "Provide personalized content recommendations based on accessibility needs "
            "and preferences."
        ),
        "accessibility": (
            "Focus on accessibility features, settings, and assistance. "
            "Provide detailed guidance on using accessibility tools."
        ),
        "general": (
            "Provide comprehensive assistance across all platform features "
            "with a focus on accessibility."
        ),
    }
)

_FALLBACK_RESPONSE: Final = (
    "I'm having trouble processing your request right now. Please try rephrasing your "
    "question or check your AI settings."
)
_FALLBACK_SUGGESTIONS: Final = (
    "Try asking about movie recommendations",
    "Search for accessible content",
    "Ask about navigation help",
)


def build_system_context(context: str, preferences: UserPreferences | None = None) -> str:
    """Assemble the system prompt for ``context`` and the user's preferences."""

    focus = _CONTEXT_FOCUS.get(context, _CONTEXT_FOCUS["general"])
    parts = [_BASE_CONTEXT, f"Context: {focus}"]
    if preferences is not None and preferences.accessibility_needs:
        parts.append(f"User's accessibility needs: {', '.join(preferences.accessibility_needs)}")
    if preferences is not None and preferences.preferred_genres:
        parts.append(f"User's preferred genres: {', '.join(preferences.preferred_genres)}")
    return "\n\n".join(parts)


def build_conversation_context(history: Sequence[ConversationTurn]) -> str:
    if not history:
        return "No previous conversation."
    recent = history[-CONVERSATION_HISTORY_WINDOW:]
    return "\n".join(f"{turn.role}: {turn.content}" for turn in recent)


class AssistantService:
    """Route assistant queries to a provider and shape the answer."""

    def __init__(
        self,
        providers: Mapping[str, AIProvider] | None = None,
        *,
        default_provider: str = DEFAULT_AI_PROVIDER,
    ) -> None:
        self._providers = dict(default_providers() if providers is None else providers)
        self._default_provider = default_provider

    async def query(self, request: AssistantRequest) -> CommandResponse:
        """Answer ``request``; provider failures yield a low-confidence fallback."""

        provider_name = self._select_provider(request.preferences)
        system_context = build_system_context(request.context, request.preferences)
        conversation = build_conversation_context(request.conversation_history)
        prompt = (
            f"{system_context}\n\nConversation History:\n{conversation}\n\n"
            f"User Query: {request.query}"
        )

        result = await self._complete(provider_name, prompt, request.context)
        if not result.ok:
            _LOGGER.warning(
                "assistant_provider_failed provider=%s query=%s error=%s",
                provider_name,
                request.query,
                result.error,
            )
            return self._fallback_response(provider_name, result.error)

        payload = result.payload
        intent = classify_intent(Utterance.from_text(request.query).normalized)
        _LOGGER.info(
            "assistant_query_complete provider=%s intent=%s action=%s",
            provider_name,
            intent.name,
            payload.action,
        )
        return CommandResponse(
            action=payload.action or "assistant_response",
            intent=intent.name,
            confidence=payload.confidence,
            response=payload.response,
            speech_text=payload.speech_text or payload.response,
            data=AssistantPayload(
                provider=provider_name,
                follow_up_questions=payload.follow_up_questions,
                details=dict(payload.data),
            ),
            suggestions=assistant_suggestions_for(intent.name),
            predicted_next_actions=predict_assistant_actions(intent.name),
            routed_intent=intent.name,
        )

    def proactive(self, context: str) -> CommandResponse:
        """Return the canned unprompted help for ``context``."""

        help_ = proactive_help_for(context)
        return CommandResponse(
            action="proactive_assistance",
            confidence=help_.confidence,
            response=help_.message,
            speech_text=help_.speech_text,
            suggestions=help_.suggestions,
            predicted_next_actions=help_.predicted_actions,
        )

    def _select_provider(self, preferences: UserPreferences | None) -> str:
        requested = preferences.ai_provider if preferences is not None else None
        if requested and requested in self._providers:
            return requested
        return self._default_provider

    async def _complete(self, provider_name: str, prompt: str, context: str) -> ProviderResult:
        provider = self._providers.get(provider_name)
        if provider is None:
            return ProviderResult.failure(f"Unknown provider '{provider_name}'")

        try:
            raw = await provider.complete(prompt, context)
        except Exception as exc:
            return ProviderResult.failure(exc)

        if isinstance(raw, ProviderResult):
            return raw

        try:
            validate(dict(raw), PAYLOAD_SCHEMA)
        except (ValidationError, TypeError, ValueError) as exc:
            return ProviderResult.failure(exc)
        return ProviderResult.success(raw)

    @staticmethod
    def _fallback_response(provider_name: str, error: str | None) -> CommandResponse:
        return CommandResponse(
            action="assistant_fallback",
            intent="unknown",
            confidence=PROVIDER_FALLBACK_CONFIDENCE,
            response=_FALLBACK_RESPONSE,
            speech_text=_FALLBACK_RESPONSE,
            data=AssistantPayload(
                provider=provider_name,
                details={"error": error} if error else {},
            ),
            suggestions=_FALLBACK_SUGGESTIONS,
        )
