"""Tests for the in-memory and HTTP content stores."""

from __future__ import annotations

import json

import httpx
import pytest

from accessicinema.content_store import (
    ContentNotFoundError,
    ContentStoreError,
    HttpContentStore,
    InMemoryContentStore,
)
from accessicinema.models import SearchFilters


pytestmark = pytest.mark.asyncio

ITEM_PAYLOAD = {
    "id": 42,
    "title": "The Quiet Harbour",
    "overview": "A lighthouse keeper finds an unexpected visitor.",
    "genres": ["Drama"],
    "audio_description": True,
    "vote_average": 6.4,
    "vote_count": 212,
}


def _http_store(handler) -> HttpContentStore:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://catalog.test"
    )
    return HttpContentStore("http://catalog.test", api_key="secret", client=client)


async def test_in_memory_fetch_and_missing(content_store, free_solo) -> None:
    assert await content_store.fetch_by_id(free_solo.id) == free_solo

    with pytest.raises(ContentNotFoundError) as excinfo:
        await content_store.fetch_by_id(999)
    assert excinfo.value.content_id == 999


async def test_in_memory_search_orders_by_rating(content_store) -> None:
    results = await content_store.search(SearchFilters())

    assert [item.id for item in results] == [515042, 42, 7]


async def test_in_memory_search_filters(content_store) -> None:
    by_query = await content_store.search(SearchFilters(query="lighthouse"))
    by_genre = await content_store.search(SearchFilters(genres=frozenset({"horror"})))
    by_feature = await content_store.search(
        SearchFilters(accessibility_features=frozenset({"sign_language"}))
    )
    limited = await content_store.search(SearchFilters(limit=1))

    assert [item.id for item in by_query] == [42]
    assert [item.id for item in by_genre] == [7]
    assert [item.id for item in by_feature] == [515042]
    assert len(limited) == 1


async def test_in_memory_accepts_mappings() -> None:
    store = InMemoryContentStore([ITEM_PAYLOAD])

    item = await store.fetch_by_id(42)

    assert item.title == "The Quiet Harbour"


async def test_http_fetch_sends_auth_and_parses_item() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=ITEM_PAYLOAD)

    item = await _http_store(handler).fetch_by_id(42)

    assert item.id == 42
    assert seen[0].url.path == "/movies/42"
    assert seen[0].headers["Authorization"] == "Bearer secret"


async def test_http_fetch_maps_404_to_not_found() -> None:
    store = _http_store(lambda request: httpx.Response(404, json={"detail": "missing"}))

    with pytest.raises(ContentNotFoundError):
        await store.fetch_by_id(5)


async def test_http_fetch_wraps_server_errors() -> None:
    store = _http_store(lambda request: httpx.Response(500))

    with pytest.raises(ContentStoreError):
        await store.fetch_by_id(5)


async def test_http_fetch_rejects_invalid_payload() -> None:
    store = _http_store(lambda request: httpx.Response(200, json={"title": "no id"}))

    with pytest.raises(ContentStoreError):
        await store.fetch_by_id(5)


async def test_http_search_posts_filters_and_skips_bad_rows() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"results": [ITEM_PAYLOAD, {"id": "bad"}]})

    filters = SearchFilters(query="harbour", genres=frozenset({"drama"}))
    items = await _http_store(handler).search(filters)

    assert [item.id for item in items] == [42]
    assert bodies == [
        {"query": "harbour", "genres": ["drama"], "accessibility_features": [], "limit": 20}
    ]


async def test_http_search_returns_empty_on_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("catalog down", request=request)

    assert await _http_store(handler).search(SearchFilters(query="harbour")) == []
