"""Pytest fixtures and configuration.

This module provides:
- A fixed "now" instant
- Catalog item factories
- Fake catalog, content fetcher and transcript API collaborators
- Settings without environment leakage
"""

import logging
from collections.abc import Generator
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from channel_shop.channel.schemas import CatalogItem, ContentMode
from channel_shop.core.config import Settings

# =============================================================================
# Test Configuration
# =============================================================================

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
CHANNEL_ID = "UCtestchannel"


# =============================================================================
# Sample Data Fixtures
# =============================================================================


def make_item(
    item_id: str = "vid1",
    title: str | None = "Test Video Title",
    published_at: datetime | None = None,
    duration: str | None = "PT10M",
    thumbnail_url: str | None = "https://i.ytimg.com/vi/vid1/hqdefault.jpg",
    channel_title: str | None = "Test Channel",
    metadata: dict[str, Any] | None = None,
) -> CatalogItem:
    """Build a CatalogItem with sensible defaults."""
    published_at = published_at or NOW - timedelta(days=10)
    return CatalogItem(
        item_id=item_id,
        title=title,
        published_at=published_at,
        duration=duration,
        thumbnail_url=thumbnail_url,
        channel_title=channel_title,
        metadata=metadata if metadata is not None else {"title": title},
    )


@pytest.fixture(autouse=True)
def reset_shop_logger() -> Generator[None, None, None]:
    """Undo setup_logging between tests so caplog sees shop records."""

    def _reset():
        shop_logger = logging.getLogger("channel_shop")
        shop_logger.handlers.clear()
        shop_logger.propagate = True
        shop_logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()


@pytest.fixture
def now() -> datetime:
    """Fixed current instant."""
    return NOW


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore the process environment and .env file.

    Returns:
        Settings instance
    """
    return Settings(_env_file=None, youtube_api_key="test-api-key")


@pytest.fixture
def sample_video_resource() -> dict[str, Any]:
    """Sample ``videos.list`` resource.

    Returns:
        Video resource dictionary
    """
    return {
        "kind": "youtube#video",
        "id": "dQw4w9WgXcQ",
        "snippet": {
            "publishedAt": "2023-03-01T10:00:00Z",
            "channelId": CHANNEL_ID,
            "title": "Never Gonna Give You Up",
            "description": "Official video",
            "thumbnails": {
                "default": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg"},
                "medium": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/mqdefault.jpg"},
                "high": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg"},
            },
            "channelTitle": "Rick Astley",
        },
        "contentDetails": {"duration": "PT3M33S"},
    }


# =============================================================================
# Fake Collaborators
# =============================================================================


class RecordingFetcher:
    """Content fetcher that records calls and returns ``<mode>:<id>``."""

    def __init__(self):
        self.calls: list[tuple[str, ContentMode]] = []

    def __call__(self, item: CatalogItem, mode: ContentMode) -> str:
        self.calls.append((item.item_id, mode))
        return f"{ContentMode(mode).value}:{item.item_id}"


class FakeCatalog:
    """Catalog returning a fixed list of items (or raising)."""

    def __init__(self, items: list[CatalogItem] | None = None, error: Exception | None = None):
        self.items = items or []
        self.error = error
        self.requested: list[str] = []

    def list_videos(self, channel_id: str) -> list[CatalogItem]:
        self.requested.append(channel_id)
        if self.error:
            raise self.error
        return list(self.items)


@dataclass
class FakeSnippet:
    text: str
    start: float = 0.0
    duration: float = 1.0


class FakeTranscriptApi:
    """Stand-in for YouTubeTranscriptApi with canned transcripts."""

    def __init__(self, transcripts: dict[str, list[str]] | None = None):
        self.transcripts = transcripts or {}
        self.calls: list[tuple[str, list[str]]] = []

    def fetch(self, video_id: str, languages: list[str] | None = None) -> list[FakeSnippet]:
        self.calls.append((video_id, list(languages or [])))
        if video_id not in self.transcripts:
            raise RuntimeError(f"Could not retrieve a transcript for the video {video_id}")
        return [FakeSnippet(text=text) for text in self.transcripts[video_id]]


@pytest.fixture
def recording_fetcher() -> RecordingFetcher:
    """Recording content fetcher."""
    return RecordingFetcher()


@pytest.fixture
def fake_transcript_api() -> FakeTranscriptApi:
    """Transcript API with one available transcript (vid1)."""
    return FakeTranscriptApi({"vid1": ["Hello,", "this is a test.", "Second segment."]})
