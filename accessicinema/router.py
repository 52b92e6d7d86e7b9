"""Context-scoped decision tables turning commands into draft responses."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from types import MappingProxyType
from typing import Awaitable, Callable, Final, Mapping

from .content_store import ContentStore
from .models import (
    AccessibilityFeaturesPayload,
    CaptionsPayload,
    CommandContext,
    ContentItem,
    ContentSummary,
    DescriptionPayload,
    EntitySet,
    FilterPayload,
    Intent,
    IntentName,
    RatingPayload,
    RecommendPayload,
    ResponsePayload,
    SearchFilters,
    SearchPayload,
    SimilarPayload,
    Utterance,
    VolumePayload,
)
from .scoring import FEATURE_LABELS, accessibility_score, present_features

__all__ = [
    "CONTENT_CONTEXTS",
    "CommandError",
    "ContextRouter",
    "InvalidArgumentError",
    "RouteResult",
    "extract_filter",
    "extract_search_term",
]

_LOGGER = logging.getLogger(__name__)

CONTENT_CONTEXTS: Final = frozenset({CommandContext.PLAYER, CommandContext.DETAILS})

_SEARCH_PATTERNS: Final = tuple(
    re.compile(rf"\b{phrase}\s+(.+)", re.IGNORECASE)
    for phrase in ("search for", "find", "look for", "show me", "get", "discover")
)
_SEARCH_FILLER: Final = re.compile(
    r"\b(?:search|find|for|look|show|me|get|discover)\b", re.IGNORECASE
)
_FILTER_PATTERNS: Final = tuple(
    re.compile(rf"\b{phrase}\s+(.+)", re.IGNORECASE)
    for phrase in ("filter by", "show only", "only", "with", "that have")
)
_TRAILING_PUNCTUATION: Final = ".?!,;: "
_WORDS: Final = re.compile(r"[a-z]+")


class CommandError(RuntimeError):
    """Raised when a command cannot be routed because of its arguments."""


class InvalidArgumentError(CommandError):
    """Raised when a structural argument such as the content id is missing."""


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Draft response produced by a decision table row."""

    action: str
    intent: IntentName
    response: str
    speech_text: str
    data: ResponsePayload | None = None
    navigation_instructions: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class _Command:
    utterance: Utterance
    intent: Intent
    entities: EntitySet
    content_id: int | None
    store: ContentStore
    item: ContentItem | None = None

    @property
    def text(self) -> str:
        return self.utterance.normalized


_Builder = Callable[[_Command], Awaitable[RouteResult]]


@dataclass(frozen=True, slots=True)
class _Rule:
    """One decision table row; matches on classified intents or substrings."""

    build: _Builder
    triggers: tuple[str, ...] = ()
    intents: tuple[IntentName, ...] = ()

    def matches(self, command: _Command) -> bool:
        if command.intent.name in self.intents:
            return True
        return any(trigger in command.text for trigger in self.triggers)


class ContextRouter:
    """Dispatch a classified command to the decision table of its context."""

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    async def route(
        self,
        context: CommandContext,
        intent: Intent,
        entities: EntitySet,
        utterance: Utterance,
        content_id: int | None = None,
    ) -> RouteResult:
        context = CommandContext(context)
        if context in CONTENT_CONTEXTS and content_id is None:
            raise InvalidArgumentError(f"Content id required for {context.value} commands")

        item = None
        if context is CommandContext.DETAILS:
            item = await self._store.fetch_by_id(content_id)

        command = _Command(
            utterance=utterance,
            intent=intent,
            entities=entities,
            content_id=content_id,
            store=self._store,
            item=item,
        )
        for rule in ROUTING_TABLES[context]:
            if rule.matches(command):
                return await rule.build(command)

        _LOGGER.debug("command_unrecognized context=%s utterance=%s", context.value, utterance.raw)
        return _unrecognized(context)


def extract_search_term(raw: str) -> str:
    """Strip the leading command phrase from ``raw`` keeping the title's case."""

    raw = " ".join(raw.split())
    for pattern in _SEARCH_PATTERNS:
        match = pattern.search(raw)
        if match:
            return match.group(1).strip(_TRAILING_PUNCTUATION)
    stripped = _SEARCH_FILLER.sub(" ", raw)
    return " ".join(stripped.split()).strip(_TRAILING_PUNCTUATION)


def extract_filter(raw: str) -> str:
    raw = " ".join(raw.split())
    for pattern in _FILTER_PATTERNS:
        match = pattern.search(raw)
        if match:
            return match.group(1).strip(_TRAILING_PUNCTUATION)
    return "unknown"


# search


async def _search(command: _Command) -> RouteResult:
    term = extract_search_term(command.utterance.raw)
    results: tuple[ContentSummary, ...] = ()
    if term:
        filters = SearchFilters(
            query=term,
            genres=command.entities.genres,
            accessibility_features=command.entities.accessibility_features,
        )
        items = await command.store.search(filters)
        results = tuple(
            ContentSummary(
                id=item.id,
                title=item.title,
                overview=item.overview,
                accessibility_score=accessibility_score(item),
            )
            for item in items
        )

    return RouteResult(
        action="search",
        intent="search",
        response=f'Searching for "{term}"',
        data=SearchPayload(query=term, results=results),
        speech_text=f"Searching for {term}. Please wait while I find accessible movies.",
        navigation_instructions=(
            "Search results will be announced when ready",
            "Use arrow keys to navigate through results",
            "Press Enter to select a movie",
        ),
    )


async def _filter(command: _Command) -> RouteResult:
    phrase = extract_filter(command.utterance.raw)
    return RouteResult(
        action="filter",
        intent="filter",
        response=f"Applying filter: {phrase}",
        data=FilterPayload(filter=phrase),
        speech_text=f"Filtering results by {phrase}. Updated results will be announced.",
    )


async def _recommend(command: _Command) -> RouteResult:
    genres = tuple(sorted(command.entities.genres))
    features = tuple(sorted(command.entities.accessibility_features))
    focus = f" in {', '.join(genres)}" if genres else ""
    return RouteResult(
        action="recommend",
        intent="recommend",
        response=f"Finding recommendations{focus}",
        data=RecommendPayload(genres=genres, accessibility_features=features),
        speech_text=(
            f"Finding accessible recommendations{focus}. "
            "Recommendations will be announced when ready."
        ),
    )


# player


async def _play(command: _Command) -> RouteResult:
    return RouteResult(
        action="play",
        intent="play",
        response="Starting movie playback",
        speech_text=(
            "Starting movie playback. Audio description is enabled. "
            "Use voice commands to control playback."
        ),
        navigation_instructions=(
            'Say "pause" to pause the movie',
            'Say "volume up" or "volume down" to adjust audio',
            'Say "enable captions" to turn on closed captions',
        ),
    )


async def _pause(command: _Command) -> RouteResult:
    return RouteResult(
        action="pause",
        intent="pause",
        response="Pausing movie playback",
        speech_text='Movie paused. Say "play" to resume, or "stop" to exit.',
    )


_VOLUME_SPEECH: Final = {"increase": "increased", "decrease": "decreased", "set": "set"}


async def _volume(command: _Command) -> RouteResult:
    if "up" in command.text:
        direction = "increase"
    elif "down" in command.text:
        direction = "decrease"
    else:
        direction = "set"
    return RouteResult(
        action="volume",
        intent="play",
        response=f"Adjusting volume: {direction}",
        data=VolumePayload(direction=direction),
        speech_text=f"Volume {_VOLUME_SPEECH[direction]}. Current volume level will be announced.",
    )


def _captions_enabled(text: str) -> bool:
    # "on" must be a word of its own, otherwise every "caption" would match.
    return "enable" in text or "turn on" in text or "on" in _WORDS.findall(text)


async def _captions(command: _Command) -> RouteResult:
    enable = _captions_enabled(command.text)
    return RouteResult(
        action="captions",
        intent="play",
        response="Enabling captions" if enable else "Disabling captions",
        data=CaptionsPayload(enable=enable),
        speech_text="Closed captions enabled." if enable else "Closed captions disabled.",
    )


async def _describe_playback(command: _Command) -> RouteResult:
    return RouteResult(
        action="describe",
        intent="describe",
        response="Starting audio description",
        speech_text="Audio description started. Scenes will be described during playback.",
    )


# details


def _require_item(command: _Command) -> ContentItem:
    if command.item is None:  # pragma: no cover - route() always fetches for details
        raise InvalidArgumentError("Content item required for details commands")
    return command.item


async def _read_description(command: _Command) -> RouteResult:
    item = _require_item(command)
    overview = item.overview or "No description is available."
    return RouteResult(
        action="read_description",
        intent="describe",
        response="Reading movie description",
        data=DescriptionPayload(title=item.title, description=item.overview),
        speech_text=f"{item.title}. {overview}",
    )


async def _accessibility_features(command: _Command) -> RouteResult:
    item = _require_item(command)
    features = tuple(FEATURE_LABELS[feature] for feature in present_features(item))
    if features:
        speech = f"This movie has the following accessibility features: {', '.join(features)}."
    else:
        speech = (
            "This movie does not have specific accessibility features listed. "
            "A detailed narration can be generated on request."
        )
    return RouteResult(
        action="accessibility_features",
        intent="describe",
        response="Listing accessibility features",
        data=AccessibilityFeaturesPayload(features=features),
        speech_text=speech,
    )


async def _rating(command: _Command) -> RouteResult:
    item = _require_item(command)
    return RouteResult(
        action="rating",
        intent="describe",
        response="Reading movie rating",
        data=RatingPayload(rating=item.vote_average, vote_count=item.vote_count),
        speech_text=(
            f"This movie has a rating of {item.vote_average:.1f} out of 10, "
            f"based on {item.vote_count} votes."
        ),
    )


async def _find_similar(command: _Command) -> RouteResult:
    item = _require_item(command)
    return RouteResult(
        action="find_similar",
        intent="recommend",
        response="Finding similar movies",
        data=SimilarPayload(content_id=item.id, genres=item.genres),
        speech_text=f"Looking for accessible movies similar to {item.title}.",
    )


# navigation


def _navigation(
    action: str,
    response: str,
    speech_text: str,
    instructions: tuple[str, ...],
    *,
    intent: IntentName = "navigate",
) -> _Builder:
    result = RouteResult(
        action=action,
        intent=intent,
        response=response,
        speech_text=speech_text,
        navigation_instructions=instructions,
    )

    async def _build(command: _Command) -> RouteResult:
        return result

    return _build


_HELP_SPEECH: Final = (
    'Available voice commands: "search for" followed by a movie title, "go home", '
    '"search page", "favorites", "settings", "play", "pause", "volume up", '
    '"volume down", "enable captions", "read description", "accessibility features", '
    'and "rating".'
)


ROUTING_TABLES: Final[Mapping[CommandContext, tuple[_Rule, ...]]] = MappingProxyType({
    CommandContext.SEARCH: (
        _Rule(_search, intents=("search",)),
        _Rule(_filter, intents=("filter",)),
        _Rule(_recommend, intents=("recommend",)),
    ),
    CommandContext.PLAYER: (
        _Rule(_play, triggers=("play", "start")),
        _Rule(_pause, triggers=("pause", "stop")),
        _Rule(_volume, triggers=("volume",)),
        _Rule(_captions, triggers=("caption", "subtitle")),
        _Rule(_describe_playback, triggers=("describe", "narrate")),
    ),
    CommandContext.DETAILS: (
        _Rule(_read_description, triggers=("read description", "describe", "tell me about")),
        _Rule(_accessibility_features, triggers=("accessibility", "features")),
        _Rule(_rating, triggers=("rating", "how good")),
        _Rule(_find_similar, triggers=("similar", "like this")),
    ),
    CommandContext.NAVIGATION: (
        _Rule(
            _navigation(
                "navigate_home",
                "Navigating to home page",
                "Navigating to home page. Popular accessible movies will be loaded.",
                (
                    "Home page contains popular movies with accessibility features",
                    "Use Tab to navigate between movie cards",
                    "Press Enter to view movie details",
                ),
            ),
            triggers=("go home", "main page"),
        ),
        _Rule(
            _navigation(
                "navigate_search",
                "Navigating to search page",
                "Navigating to search page. You can search for movies by title, genre, "
                "or accessibility features.",
                (
                    "Search input field is focused and ready",
                    "Type your search query or use voice commands",
                    "Results will be announced when available",
                ),
            ),
            triggers=("search page", "find movies"),
        ),
        _Rule(
            _navigation(
                "navigate_favorites",
                "Navigating to favorites",
                "Navigating to your favorite movies. "
                "Your saved accessible movies will be displayed.",
                (
                    "Favorites are listed in the order you saved them",
                    "Use Tab to move between saved movies",
                    "Press Enter to view movie details",
                ),
            ),
            triggers=("favorites", "my movies"),
        ),
        _Rule(
            _navigation(
                "navigate_settings",
                "Navigating to accessibility settings",
                "Navigating to accessibility settings. "
                "You can customize your viewing preferences here.",
                (
                    "Accessibility settings allow you to customize your experience",
                    "Use Tab to navigate between options",
                    "Changes are saved automatically",
                ),
            ),
            triggers=("settings", "accessibility options"),
        ),
        _Rule(
            _navigation(
                "help",
                "Showing voice command help",
                _HELP_SPEECH,
                (
                    "Voice commands work throughout the application",
                    "Speak clearly and wait for confirmation",
                    'Say "help" anytime to hear available commands',
                ),
                intent="help",
            ),
            triggers=("help", "what can i say"),
        ),
    ),
})

_UNRECOGNIZED: Final[Mapping[CommandContext, tuple[str, str]]] = MappingProxyType({
    CommandContext.SEARCH: (
        "Command not recognized",
        'I did not understand that command. Try saying "search for" followed by a movie '
        'title, or "filter by" followed by a category.',
    ),
    CommandContext.PLAYER: (
        "Player command not recognized",
        'Player command not recognized. Try "play", "pause", "volume up", "volume down", '
        'or "enable captions".',
    ),
    CommandContext.DETAILS: (
        "Details command not recognized",
        'Command not recognized. Try "read description", "accessibility features", '
        'or "rating".',
    ),
    CommandContext.NAVIGATION: (
        "Navigation command not recognized",
        'Navigation command not recognized. Say "help" to hear available commands.',
    ),
})


def _unrecognized(context: CommandContext) -> RouteResult:
    response, speech = _UNRECOGNIZED[context]
    return RouteResult(action="unknown", intent="unknown", response=response, speech_text=speech)
