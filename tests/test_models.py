"""Tests for the shared pydantic models."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from accessicinema.models import (
    BrailleRequest,
    CaptionsPayload,
    CommandRequest,
    CommandResponse,
    ContentItem,
    ResponsePayload,
    SearchPayload,
    Utterance,
)


def test_utterance_normalizes_case_and_whitespace() -> None:
    utterance = Utterance.from_text("  Search   for\tFree Solo ")

    assert utterance.raw == "Search   for\tFree Solo"
    assert utterance.normalized == "search for free solo"


def test_payload_union_is_discriminated_by_kind() -> None:
    adapter = TypeAdapter(ResponsePayload)

    payload = adapter.validate_python({"kind": "captions", "enable": False})

    assert payload == CaptionsPayload(enable=False)


def test_command_response_round_trips_payload() -> None:
    response = CommandResponse(
        action="search",
        intent="search",
        confidence=0.8,
        response='Searching for "Free Solo"',
        speech_text="Searching for Free Solo.",
        data=SearchPayload(query="Free Solo"),
    )

    restored = CommandResponse.model_validate(response.model_dump(mode="json"))

    assert isinstance(restored.data, SearchPayload)
    assert restored == response


def test_models_forbid_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        CommandRequest(utterance="play", mood="happy")


def test_models_are_frozen(free_solo) -> None:
    with pytest.raises(ValidationError):
        free_solo.title = "Other"


def test_content_item_validates_rating_range() -> None:
    with pytest.raises(ValidationError):
        ContentItem(id=1, title="Bad", vote_average=11)


def test_braille_request_rejects_zero_width() -> None:
    with pytest.raises(ValidationError):
        BrailleRequest(text="abc", cells_per_line=0)
