"""Per-mode content fetchers for surviving catalog items."""

import json
from typing import Any

from channel_shop.channel.schemas import CatalogItem, ContentMode
from channel_shop.core.constants import (
    AUDIO_PLACEHOLDER,
    TRANSCRIPT_FALLBACK,
    YOUTUBE_WATCH_URL,
)
from channel_shop.core.exceptions import ConfigurationError, ContentFetchError
from channel_shop.core.logging_config import get_logger, log_content_event

logger = get_logger(__name__)


def video_url(video_id: str) -> str:
    """Canonical watch URL of a video."""
    return YOUTUBE_WATCH_URL.format(video_id=video_id)


def transcript_header(item: CatalogItem) -> str:
    """Descriptive block prepended to transcripts."""
    lines = [
        f"Title: {item.title or ''}",
        f"URL: {video_url(item.item_id)}",
        f"Uploader: {item.channel_title or ''}",
        f"Published: {item.published_at.isoformat()}",
    ]
    return "\n".join(lines)


class TranscriptFetcher:
    """Fetch transcripts with youtube-transcript-api.

    Missing transcripts never fail the caller: any error is logged and the
    fixed fallback string is returned instead.
    """

    def __init__(
        self,
        include_header: bool = True,
        api: Any | None = None,
        languages: list[str] | None = None,
    ):
        self.include_header = include_header
        self.languages = languages or ["en"]
        self._api = api

    @property
    def api(self) -> Any:
        if self._api is None:
            from youtube_transcript_api import YouTubeTranscriptApi

            self._api = YouTubeTranscriptApi()
        return self._api

    def fetch_text(self, video_id: str) -> str:
        """Fetch raw transcript text, snippets joined by single spaces."""
        transcript = self.api.fetch(video_id, languages=self.languages)
        return " ".join(snippet.text for snippet in transcript)

    def __call__(self, item: CatalogItem) -> str:
        try:
            text = self.fetch_text(item.item_id)
        except Exception as e:
            log_content_event(logger, item.item_id, ContentMode.TRANSCRIPT.value, "fallback", str(e))
            return TRANSCRIPT_FALLBACK

        log_content_event(logger, item.item_id, ContentMode.TRANSCRIPT.value, "fetched")
        if self.include_header:
            return f"{transcript_header(item)}\n\n{text}"
        return text


class ContentFetcher:
    """Produce the payload for an item in a given content mode.

    Instances are callables with the ``(item, mode) -> str`` signature the
    reconciler expects.
    """

    def __init__(
        self,
        include_header: bool = True,
        transcript_api: Any | None = None,
        languages: list[str] | None = None,
    ):
        self.transcripts = TranscriptFetcher(
            include_header=include_header,
            api=transcript_api,
            languages=languages,
        )

    def __call__(self, item: CatalogItem, mode: ContentMode) -> str:
        try:
            mode = ContentMode(mode)
        except ValueError as e:
            raise ConfigurationError(f"Invalid mode: {mode}", field="mode") from e

        if mode == ContentMode.METADATA:
            return self.metadata(item)
        if mode == ContentMode.THUMBNAIL:
            return self.thumbnail(item)
        if mode == ContentMode.TRANSCRIPT:
            return self.transcripts(item)
        if mode == ContentMode.VIDEO:
            return video_url(item.item_id)

        # Audio extraction is reserved
        log_content_event(logger, item.item_id, mode.value, "placeholder")
        return AUDIO_PLACEHOLDER

    def metadata(self, item: CatalogItem) -> str:
        return json.dumps(item.metadata, ensure_ascii=False)

    def thumbnail(self, item: CatalogItem) -> str:
        if not item.thumbnail_url:
            raise ContentFetchError(f"No thumbnail available for {item.item_id}")
        return item.thumbnail_url
