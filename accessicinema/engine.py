"""Command interpretation facade tying classification, routing and composition."""

from __future__ import annotations

import logging
import time

from .composer import compose_response
from .content_store import ContentStore
from .entities import extract_entities
from .intents import classify_intent
from .models import CommandContext, CommandResponse, IntentName, Utterance
from .router import ContextRouter
from .telemetry import TelemetryRecorder

__all__ = ["CommandInterpreter"]

_LOGGER = logging.getLogger(__name__)


def _now() -> float:
    return time.perf_counter()


class CommandInterpreter:
    """Interpret free-text commands against a content store."""

    def __init__(
        self,
        store: ContentStore,
        *,
        telemetry: TelemetryRecorder | None = None,
    ) -> None:
        self._router = ContextRouter(store)
        self._telemetry = telemetry

    @property
    def telemetry(self) -> TelemetryRecorder | None:
        return self._telemetry

    async def interpret(
        self,
        utterance: str,
        context: CommandContext = CommandContext.NAVIGATION,
        content_id: int | None = None,
        user_id: str | None = None,
    ) -> CommandResponse:
        """Turn ``utterance`` into a structured :class:`CommandResponse`.

        Raises :class:`~accessicinema.router.InvalidArgumentError` when a player
        or details command lacks ``content_id`` and
        :class:`~accessicinema.content_store.ContentNotFoundError` when the
        referenced item does not exist. Unrecognized commands never raise.
        """

        context = CommandContext(context)
        command = Utterance.from_text(utterance)
        start = _now()
        _LOGGER.info(
            "command_interpret_start utterance=%s context=%s content_id=%s",
            command.raw,
            context.value,
            content_id,
        )

        intent = classify_intent(command.normalized, context)
        entities = extract_entities(command.normalized)
        try:
            route = await self._router.route(context, intent, entities, command, content_id)
        except Exception as exc:
            self._record(
                command, context, intent.name, "error", 0.0, start, type(exc).__name__, user_id
            )
            _LOGGER.info(
                "command_interpret_failed utterance=%s context=%s error=%s",
                command.raw,
                context.value,
                exc,
            )
            raise

        response = compose_response(route, intent, context)
        outcome = "unrecognized" if response.action == "unknown" else "handled"
        self._record(
            command,
            context,
            response.intent,
            response.action,
            response.confidence,
            start,
            outcome,
            user_id,
        )
        _LOGGER.info(
            "command_interpret_complete utterance=%s context=%s intent=%s action=%s",
            command.raw,
            context.value,
            response.intent,
            response.action,
        )
        return response

    def _record(
        self,
        command: Utterance,
        context: CommandContext,
        intent: IntentName,
        action: str,
        confidence: float,
        start: float,
        outcome: str,
        user_id: str | None,
    ) -> None:
        if self._telemetry is None:
            return
        self._telemetry.record_event(
            utterance=command.raw,
            context=context,
            intent=intent,
            action=action,
            confidence=confidence,
            duration_ms=max((_now() - start) * 1000, 0.0),
            outcome=outcome,
            user_id=user_id,
        )
