"""Shared pytest fixtures for AccessiCinema tests."""

from __future__ import annotations

import pytest

from accessicinema.content_store import InMemoryContentStore
from accessicinema.models import ContentItem


@pytest.fixture
def free_solo() -> ContentItem:
    """Documentary with every accessibility feature."""

    return ContentItem(
        id=515042,
        title="Free Solo",
        overview="Alex Honnold attempts to climb El Capitan without a rope.",
        genres=("Documentary",),
        audio_description=True,
        closed_captions=True,
        sign_language=True,
        narrated_description="A climber stands at the foot of a granite wall.",
        vote_average=7.9,
        vote_count=1650,
    )


@pytest.fixture
def described_only() -> ContentItem:
    """Item whose only accessibility feature is audio description."""

    return ContentItem(
        id=42,
        title="The Quiet Harbour",
        overview="A lighthouse keeper finds an unexpected visitor.",
        genres=("Drama",),
        audio_description=True,
        vote_average=6.4,
        vote_count=212,
    )


@pytest.fixture
def bare_item() -> ContentItem:
    return ContentItem(id=7, title="Static", genres=("Horror",), vote_average=3.0, vote_count=9)


@pytest.fixture
def content_store(free_solo, described_only, bare_item) -> InMemoryContentStore:
    return InMemoryContentStore([free_solo, described_only, bare_item])
