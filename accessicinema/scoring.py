"""Accessibility completeness scoring for catalog items."""

from __future__ import annotations

from .const import (
    ACCESSIBILITY_WEIGHTS,
    FEATURE_AUDIO_DESCRIPTION,
    FEATURE_CLOSED_CAPTIONS,
    FEATURE_NARRATION,
    FEATURE_SIGN_LANGUAGE,
)
from .models import AccessibilityReport, AccessibilityScore, ContentItem

__all__ = [
    "FEATURE_LABELS",
    "accessibility_score",
    "analyze_accessibility",
    "present_features",
    "score_content",
]

FEATURE_LABELS: dict[str, str] = {
    FEATURE_AUDIO_DESCRIPTION: "audio description",
    FEATURE_CLOSED_CAPTIONS: "closed captions",
    FEATURE_SIGN_LANGUAGE: "sign language interpretation",
    FEATURE_NARRATION: "detailed narration",
}

_IMPROVEMENTS: dict[str, str] = {
    FEATURE_AUDIO_DESCRIPTION: "Add professional audio descriptions",
    FEATURE_CLOSED_CAPTIONS: "Add closed captions with sound effect descriptions",
    FEATURE_SIGN_LANGUAGE: "Consider adding sign language interpretation",
    FEATURE_NARRATION: "Generate AI-powered detailed narration",
}


def present_features(item: ContentItem) -> list[str]:
    """Return the feature tags available for ``item`` in weight order."""

    flags = {
        FEATURE_AUDIO_DESCRIPTION: item.audio_description,
        FEATURE_CLOSED_CAPTIONS: item.closed_captions,
        FEATURE_SIGN_LANGUAGE: item.sign_language,
        FEATURE_NARRATION: item.has_narration,
    }
    return [feature for feature in ACCESSIBILITY_WEIGHTS if flags[feature]]


def accessibility_score(item: ContentItem) -> float:
    """Weighted share of accessibility features present, clamped to [0, 1]."""

    total = sum(ACCESSIBILITY_WEIGHTS[feature] for feature in present_features(item))
    return max(0.0, min(1.0, round(total, 6)))


def score_content(item: ContentItem) -> AccessibilityScore:
    return AccessibilityScore(content_id=item.id, score=accessibility_score(item))


def analyze_accessibility(item: ContentItem) -> AccessibilityReport:
    """Describe which features ``item`` has, what is missing and who it suits."""

    present = present_features(item)
    missing = [feature for feature in ACCESSIBILITY_WEIGHTS if feature not in present]

    suitable: list[str] = []
    if FEATURE_AUDIO_DESCRIPTION in present or FEATURE_NARRATION in present:
        suitable.append("Visually impaired users")
    if FEATURE_CLOSED_CAPTIONS in present:
        suitable.append("Deaf and hard-of-hearing users")
    if FEATURE_SIGN_LANGUAGE in present:
        suitable.append("Sign language users")

    return AccessibilityReport(
        content_id=item.id,
        score=accessibility_score(item),
        features=tuple(FEATURE_LABELS[feature] for feature in present),
        improvements=tuple(_IMPROVEMENTS[feature] for feature in missing),
        suitable_for=tuple(suitable),
    )
