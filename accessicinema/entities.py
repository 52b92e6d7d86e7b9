"""Vocabulary scan for accessibility features, genres and player keywords."""

from __future__ import annotations

from typing import Final

from .const import FEATURE_AUDIO_DESCRIPTION, FEATURE_CLOSED_CAPTIONS, FEATURE_SIGN_LANGUAGE
from .models import EntitySet

__all__ = ["ACTION_KEYWORDS", "FEATURE_PHRASES", "GENRES", "extract_entities"]

FEATURE_PHRASES: Final[tuple[tuple[str, str], ...]] = (
    ("audio description", FEATURE_AUDIO_DESCRIPTION),
    ("narration", FEATURE_AUDIO_DESCRIPTION),
    ("caption", FEATURE_CLOSED_CAPTIONS),
    ("subtitle", FEATURE_CLOSED_CAPTIONS),
    ("sign language", FEATURE_SIGN_LANGUAGE),
)

GENRES: Final[tuple[str, ...]] = (
    "action",
    "comedy",
    "drama",
    "documentary",
    "horror",
    "romance",
    "thriller",
    "sci-fi",
    "fantasy",
)

ACTION_KEYWORDS: Final[tuple[str, ...]] = (
    "volume",
    "speed",
    "quality",
    "fullscreen",
    "settings",
)


def extract_entities(normalized: str) -> EntitySet:
    """Collect every known phrase present in ``normalized``."""

    if not normalized:
        return EntitySet()

    features = {tag for phrase, tag in FEATURE_PHRASES if phrase in normalized}
    genres = {genre for genre in GENRES if genre in normalized}
    keywords = {keyword for keyword in ACTION_KEYWORDS if keyword in normalized}
    return EntitySet(
        accessibility_features=frozenset(features),
        genres=frozenset(genres),
        action_keywords=frozenset(keywords),
    )
