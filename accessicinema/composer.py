"""Final assembly of command responses."""

from __future__ import annotations

from .const import UNKNOWN_INTENT_CONFIDENCE
from .models import CommandContext, CommandResponse, Intent
from .predictions import predict_next_actions, suggestions_for
from .router import RouteResult

__all__ = ["compose_response"]


def compose_response(
    route: RouteResult,
    intent: Intent,
    context: CommandContext,
) -> CommandResponse:
    """Merge the routed draft with predictions and context suggestions."""

    confidence = intent.confidence if route.action != "unknown" else UNKNOWN_INTENT_CONFIDENCE
    return CommandResponse(
        action=route.action,
        intent=intent.name,
        routed_intent=route.intent,
        confidence=confidence,
        response=route.response,
        speech_text=route.speech_text,
        data=route.data,
        navigation_instructions=route.navigation_instructions,
        suggestions=suggestions_for(context),
        predicted_next_actions=predict_next_actions(route.intent),
    )
