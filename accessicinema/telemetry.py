"""Telemetry recording and structured logging helpers for command handling."""

from __future__ import annotations

from collections import deque
from datetime import datetime, timezone
import logging
from typing import Any, Callable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from .const import DEFAULT_TELEMETRY_MAX_EVENTS
from .models import CommandContext, IntentName


class TelemetryEvent(BaseModel):
    """Normalized telemetry payload for one interpreted command."""

    model_config = ConfigDict(extra="forbid")

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    utterance: str
    context: CommandContext
    intent: IntentName
    action: str
    confidence: float = Field(ge=0.0, le=1.0)
    duration_ms: float
    outcome: str
    user_id: str | None = None

    def summary(self) -> dict[str, Any]:
        """Return a compact summary suitable for structured logging."""

        return {
            "timestamp": self.timestamp.isoformat(),
            "utterance": self.utterance,
            "context": self.context.value,
            "intent": self.intent,
            "action": self.action,
            "confidence": float(self.confidence),
            "duration_ms": float(self.duration_ms),
            "outcome": self.outcome,
        }


class TelemetryRecorder:
    """Ring buffer of the most recent command events."""

    def __init__(
        self,
        *,
        max_events: int = DEFAULT_TELEMETRY_MAX_EVENTS,
        clock: Callable[[], datetime] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._events: deque[TelemetryEvent] = deque(maxlen=max(1, max_events))
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._logger = logger or logging.getLogger("accessicinema.telemetry")

    def record_event(
        self,
        *,
        utterance: str,
        context: CommandContext,
        intent: IntentName,
        action: str,
        confidence: float,
        duration_ms: float,
        outcome: str,
        user_id: str | None = None,
    ) -> TelemetryEvent:
        """Validate and append a telemetry event."""

        event = TelemetryEvent(
            utterance=utterance,
            context=context,
            intent=intent,
            action=action,
            confidence=confidence,
            duration_ms=float(duration_ms),
            outcome=outcome,
            user_id=user_id,
            timestamp=self._clock(),
        )
        self._events.append(event)
        self._emit_log(event)
        return event

    def iter_recent(self) -> Iterator[TelemetryEvent]:
        """Yield stored events from oldest to newest."""

        return iter(tuple(self._events))

    def as_dicts(self) -> list[dict]:
        return [event.model_dump(mode="json") for event in self._events]

    def _emit_log(self, event: TelemetryEvent) -> None:
        if not self._logger:
            return

        try:
            self._logger.info(
                "accessicinema.command",
                extra={
                    "accessicinema_command": event.summary(),
                    "accessicinema_full_event": event.model_dump(mode="json"),
                },
            )
        except Exception:  # pragma: no cover - logging failures should not break execution
            self._logger.debug("Failed to emit telemetry log", exc_info=True)
