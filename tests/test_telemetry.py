"""Tests for the command telemetry recorder."""

from __future__ import annotations

from datetime import datetime, timezone
import logging

import pytest
from pydantic import ValidationError

from accessicinema.models import CommandContext
from accessicinema.telemetry import TelemetryRecorder


FIXED_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _record(recorder: TelemetryRecorder, utterance: str, **overrides):
    payload = {
        "utterance": utterance,
        "context": CommandContext.NAVIGATION,
        "intent": "navigate",
        "action": "navigate_home",
        "confidence": 0.8,
        "duration_ms": 1.5,
        "outcome": "handled",
    }
    payload.update(overrides)
    return recorder.record_event(**payload)


class TestTelemetryRecorder:
    """TelemetryRecorder behaviors."""

    def test_keeps_only_the_most_recent_events(self) -> None:
        recorder = TelemetryRecorder(max_events=2, clock=lambda: FIXED_TIME)

        _record(recorder, "go home")
        _record(recorder, "open settings", action="navigate_settings")
        _record(recorder, "help", intent="help", action="help")

        events = list(recorder.iter_recent())
        assert [event.utterance for event in events] == ["open settings", "help"]
        assert all(event.timestamp == FIXED_TIME for event in events)

    def test_as_dicts_serializes_events(self) -> None:
        recorder = TelemetryRecorder(clock=lambda: FIXED_TIME)
        _record(recorder, "go home", user_id="viewer-1")

        (payload,) = recorder.as_dicts()

        assert payload["context"] == "navigation"
        assert payload["user_id"] == "viewer-1"
        assert payload["timestamp"].startswith("2024-05-01T12:00:00")

    def test_rejects_out_of_range_confidence(self) -> None:
        recorder = TelemetryRecorder()

        with pytest.raises(ValidationError):
            _record(recorder, "go home", confidence=1.5)

    def test_emits_structured_log(self, caplog) -> None:
        recorder = TelemetryRecorder(clock=lambda: FIXED_TIME)

        with caplog.at_level(logging.INFO, logger="accessicinema.telemetry"):
            _record(recorder, "go home")

        (record,) = [r for r in caplog.records if r.name == "accessicinema.telemetry"]
        assert record.accessicinema_command["action"] == "navigate_home"
        assert record.accessicinema_full_event["utterance"] == "go home"
