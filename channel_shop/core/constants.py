"""Application constants.

This module centralizes values shared across the shop:
- Application metadata
- YouTube endpoints and page sizes
- Identifier and content defaults
"""

# =============================================================================
# Application Metadata
# =============================================================================

APP_NAME = "channel-shop"
APP_VERSION = "0.1.0"

# =============================================================================
# YouTube Data API
# =============================================================================

YOUTUBE_API_BASE_URL = "https://www.googleapis.com/youtube/v3"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# Hard maximum for search.list / videos.list
YOUTUBE_MAX_PAGE_SIZE = 50

# Thumbnail sizes, best first
THUMBNAIL_PREFERENCE = ("high", "medium", "default")

# =============================================================================
# Identifiers
# =============================================================================

SOURCE_KIND = "youtube-channel"

# =============================================================================
# Content
# =============================================================================

TRANSCRIPT_FALLBACK = "Transcript not available"
AUDIO_PLACEHOLDER = "Audio extraction not implemented"

CREDENTIAL_YOUTUBE_API_KEY = "youtube_api_key"
YOUTUBE_API_KEY_INSTRUCTIONS = """To obtain a YouTube API key:
1. Go to https://console.developers.google.com/
2. Create a new project or select an existing one.
3. Enable the YouTube Data API v3.
4. Create an API key and copy it here."""
