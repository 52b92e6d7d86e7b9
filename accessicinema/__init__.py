"""AccessiCinema command interpretation and accessibility engine."""

from __future__ import annotations

from .braille import braille_encode, encode as encode_braille
from .content_store import (
    ContentNotFoundError,
    ContentStore,
    ContentStoreError,
    HttpContentStore,
    InMemoryContentStore,
)
from .engine import CommandInterpreter
from .models import BrailleGrade, CommandContext, CommandResponse, ContentItem
from .providers import AssistantService, ProviderFailure
from .router import CommandError, InvalidArgumentError
from .scoring import accessibility_score, analyze_accessibility

__all__ = [
    "AssistantService",
    "BrailleGrade",
    "CommandContext",
    "CommandError",
    "CommandInterpreter",
    "CommandResponse",
    "ContentItem",
    "ContentNotFoundError",
    "ContentStore",
    "ContentStoreError",
    "HttpContentStore",
    "InMemoryContentStore",
    "InvalidArgumentError",
    "ProviderFailure",
    "accessibility_score",
    "analyze_accessibility",
    "braille_encode",
    "encode_braille",
]
