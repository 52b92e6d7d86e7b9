"""Tests for vocabulary entity extraction."""

from __future__ import annotations

from accessicinema.entities import extract_entities


def test_extracts_features_genres_and_keywords_together() -> None:
    entities = extract_entities("find a comedy with audio description and subtitles at full volume")

    assert entities.accessibility_features == {"audio_description", "closed_captions"}
    assert entities.genres == {"comedy"}
    assert entities.action_keywords == {"volume"}


def test_synonyms_collapse_to_one_feature_tag() -> None:
    entities = extract_entities("narration and audio description")

    assert entities.accessibility_features == {"audio_description"}


def test_sign_language_and_hyphenated_genre() -> None:
    entities = extract_entities("sci-fi with sign language")

    assert entities.accessibility_features == {"sign_language"}
    assert entities.genres == {"sci-fi"}


def test_empty_input_yields_empty_set() -> None:
    assert extract_entities("").is_empty()
    assert extract_entities("hello there").is_empty()
