"""Re-export shared Pydantic models for the HTTP service."""

from accessicinema.models import (
    AccessibilityReport,
    AccessibilityScore,
    AssistantRequest,
    BrailleDocument,
    BrailleRequest,
    CommandRequest,
    CommandResponse,
    ContentItem,
)

__all__ = [
    "AccessibilityReport",
    "AccessibilityScore",
    "AssistantRequest",
    "BrailleDocument",
    "BrailleRequest",
    "CommandRequest",
    "CommandResponse",
    "ContentItem",
]
