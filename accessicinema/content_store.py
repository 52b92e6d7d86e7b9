"""Content store collaborators used by the command router."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Protocol

import httpx
from pydantic import ValidationError

from .const import FEATURE_AUDIO_DESCRIPTION, FEATURE_CLOSED_CAPTIONS, FEATURE_SIGN_LANGUAGE
from .models import ContentItem, SearchFilters

__all__ = [
    "ContentNotFoundError",
    "ContentStore",
    "ContentStoreError",
    "HttpContentStore",
    "InMemoryContentStore",
]

_LOGGER = logging.getLogger(__name__)


class ContentStoreError(RuntimeError):
    """Raised when the content store cannot be reached or returns garbage."""


class ContentNotFoundError(LookupError):
    """Raised when a referenced content id does not exist."""

    def __init__(self, content_id: int) -> None:
        super().__init__(f"Content {content_id} not found")
        self.content_id = content_id


class ContentStore(Protocol):
    """Read-only catalog access required by the command engine."""

    async def fetch_by_id(self, content_id: int) -> ContentItem:  # pragma: no cover - Protocol
        """Return the item for ``content_id`` or raise :class:`ContentNotFoundError`."""

    async def search(self, filters: SearchFilters) -> list[ContentItem]:  # pragma: no cover
        """Return candidate items matching ``filters``."""


class InMemoryContentStore:
    """Dict-backed store used by tests and local runs."""

    def __init__(self, items: Iterable[ContentItem | Mapping[str, Any]] = ()) -> None:
        self._items: dict[int, ContentItem] = {}
        for item in items:
            self.add(item)

    def add(self, item: ContentItem | Mapping[str, Any]) -> ContentItem:
        model = item if isinstance(item, ContentItem) else ContentItem.model_validate(item)
        self._items[model.id] = model
        return model

    async def fetch_by_id(self, content_id: int) -> ContentItem:
        try:
            return self._items[content_id]
        except KeyError:
            raise ContentNotFoundError(content_id) from None

    async def search(self, filters: SearchFilters) -> list[ContentItem]:
        query = filters.query.strip().lower()
        wanted_genres = {genre.lower() for genre in filters.genres}

        matches: list[ContentItem] = []
        for item in self._items.values():
            if query and not _matches_query(item, query):
                continue
            item_genres = {genre.lower() for genre in item.genres}
            if not wanted_genres <= item_genres:
                continue
            if not _has_features(item, filters.accessibility_features):
                continue
            matches.append(item)

        matches.sort(key=lambda item: (-item.vote_average, item.id))
        return matches[: filters.limit]


class HttpContentStore:
    """Thin HTTP client for a catalog API exposing movie lookups."""

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        timeout: float = 2.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client = client

    async def fetch_by_id(self, content_id: int) -> ContentItem:
        try:
            response = await self._request("GET", f"/movies/{content_id}")
        except httpx.HTTPStatusError as exc:
            if exc.response is not None and exc.response.status_code == httpx.codes.NOT_FOUND:
                raise ContentNotFoundError(content_id) from exc
            _LOGGER.warning(
                "content_store_failed operation=fetch content_id=%s error=%s", content_id, exc
            )
            raise ContentStoreError(f"Catalog lookup failed for {content_id}") from exc
        except httpx.HTTPError as exc:
            _LOGGER.warning(
                "content_store_failed operation=fetch content_id=%s error=%s", content_id, exc
            )
            raise ContentStoreError(f"Catalog lookup failed for {content_id}") from exc

        try:
            return ContentItem.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ContentStoreError(f"Catalog returned an invalid item for {content_id}") from exc

    async def search(self, filters: SearchFilters) -> list[ContentItem]:
        payload = {
            "query": filters.query,
            "genres": sorted(filters.genres),
            "accessibility_features": sorted(filters.accessibility_features),
            "limit": filters.limit,
        }
        try:
            response = await self._request("POST", "/movies/search", json=payload)
        except httpx.HTTPError as exc:
            _LOGGER.warning("content_store_failed operation=search query=%s error=%s", filters.query, exc)
            return []

        try:
            data = response.json()
        except ValueError:
            return []

        results = data.get("results") if isinstance(data, dict) else data
        if not isinstance(results, list):
            return []

        items: list[ContentItem] = []
        for raw in results:
            try:
                items.append(ContentItem.model_validate(raw))
            except ValidationError:
                _LOGGER.debug("Skipping invalid catalog search result: %s", raw)
        return items[: filters.limit]

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        client = self._client
        close_client = False
        if client is None:
            client = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
            close_client = True

        try:
            response = await client.request(method, path, headers=headers, **kwargs)
            response.raise_for_status()
        finally:
            if close_client:
                await client.aclose()
        return response


def _matches_query(item: ContentItem, query: str) -> bool:
    haystacks = (item.title, item.overview or "", item.narrated_description or "")
    return any(query in text.lower() for text in haystacks)


def _has_features(item: ContentItem, features: Iterable[str]) -> bool:
    flags = {
        FEATURE_AUDIO_DESCRIPTION: item.audio_description or item.has_narration,
        FEATURE_CLOSED_CAPTIONS: item.closed_captions,
        FEATURE_SIGN_LANGUAGE: item.sign_language,
    }
    return all(flags.get(feature, False) for feature in features)
