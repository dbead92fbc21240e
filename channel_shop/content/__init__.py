"""Content fetchers, one strategy per content mode."""

from channel_shop.content.fetchers import (
    ContentFetcher,
    TranscriptFetcher,
    transcript_header,
    video_url,
)

__all__ = ["ContentFetcher", "TranscriptFetcher", "transcript_header", "video_url"]
