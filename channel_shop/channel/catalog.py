"""Catalog lister - lists every video of a channel via the YouTube Data API v3."""

from datetime import datetime
from typing import Any

import requests

from channel_shop.core.config import Settings, get_settings
from channel_shop.core.constants import THUMBNAIL_PREFERENCE, YOUTUBE_MAX_PAGE_SIZE
from channel_shop.core.exceptions import CatalogError
from channel_shop.core.http_session import get
from channel_shop.core.logging_config import get_logger

from .schemas import CatalogItem

logger = get_logger(__name__)

SESSION_NAME = "youtube_api"


def _api_error_message(response: requests.Response) -> str:
    """Pull the human-readable message out of a YouTube API error body."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200]
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.text[:200]


def _pick_thumbnail(thumbnails: dict[str, Any] | None) -> str | None:
    """Return the URL of the best available thumbnail."""
    if not thumbnails:
        return None
    for size in THUMBNAIL_PREFERENCE:
        thumb = thumbnails.get(size)
        if thumb and thumb.get("url"):
            return thumb["url"]
    return None


def to_catalog_item(resource: dict[str, Any]) -> CatalogItem:
    """
    Map a ``videos.list`` resource to a CatalogItem.

    Args:
        resource: Video resource with ``snippet`` and ``contentDetails`` parts

    Returns:
        CatalogItem
    """
    snippet = resource.get("snippet") or {}
    content_details = resource.get("contentDetails") or {}

    published_raw = snippet.get("publishedAt")
    if not published_raw:
        raise CatalogError(f"Video {resource.get('id')} has no publishedAt")

    return CatalogItem(
        item_id=resource["id"],
        title=snippet.get("title"),
        published_at=datetime.fromisoformat(published_raw.replace("Z", "+00:00")),
        duration=content_details.get("duration"),
        thumbnail_url=_pick_thumbnail(snippet.get("thumbnails")),
        channel_title=snippet.get("channelTitle"),
        metadata=snippet,
    )


class YouTubeCatalog:
    """List a channel's videos using an API key.

    The client holds no global state; create one per credential and pass it
    to the shop.
    """

    def __init__(self, api_key: str, settings: Settings | None = None):
        self.api_key = api_key
        self.settings = settings or get_settings()
        self.page_size = min(self.settings.youtube_api_page_size, YOUTUBE_MAX_PAGE_SIZE)

    def _call(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.settings.youtube_api_base_url.rstrip('/')}/{endpoint}"
        try:
            response = get(
                url,
                session_name=SESSION_NAME,
                params={**params, "key": self.api_key},
                timeout=self.settings.youtube_api_timeout,
            )
        except requests.RequestException as e:
            raise CatalogError(f"YouTube API request to {endpoint} failed: {e}") from e

        if not response.ok:
            raise CatalogError(
                f"YouTube API {endpoint} returned {response.status_code}: "
                f"{_api_error_message(response)}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise CatalogError(f"YouTube API {endpoint} returned invalid JSON") from e

    def list_video_ids(self, channel_id: str) -> list[str]:
        """
        Fetch all video IDs of the channel, following pagination.

        Args:
            channel_id: YouTube channel ID

        Returns:
            Video IDs in API order (duplicates removed)
        """
        video_ids: list[str] = []
        seen: set[str] = set()
        page_token: str | None = None

        while True:
            params: dict[str, Any] = {
                "part": "id",
                "channelId": channel_id,
                "maxResults": self.page_size,
                "type": "video",
            }
            if page_token:
                params["pageToken"] = page_token

            data = self._call("search", params)

            for entry in data.get("items", []):
                video_id = (entry.get("id") or {}).get("videoId")
                if video_id and video_id not in seen:
                    seen.add(video_id)
                    video_ids.append(video_id)

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        logger.debug(f"Listed {len(video_ids)} video IDs for {channel_id}")
        return video_ids

    def list_videos(self, channel_id: str) -> list[CatalogItem]:
        """
        Fetch full details for every video of the channel.

        Args:
            channel_id: YouTube channel ID

        Returns:
            List of CatalogItem objects
        """
        video_ids = self.list_video_ids(channel_id)
        items: list[CatalogItem] = []

        for start in range(0, len(video_ids), self.page_size):
            batch = video_ids[start : start + self.page_size]
            data = self._call(
                "videos",
                {"part": "contentDetails,snippet", "id": ",".join(batch)},
            )
            items.extend(to_catalog_item(resource) for resource in data.get("items", []))

        logger.info(f"📋 Fetched {len(items)} videos for channel {channel_id}")
        return items
