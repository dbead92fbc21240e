"""Tracked identifiers for (channel, item, mode) materializations.

Format: ``<source-kind>-<channelId>-<itemId>-<mode>``. Channel, item and mode
components have ``%`` and ``-`` percent-escaped, so the last three ``-``
always delimit them and the source kind is whatever precedes. Plain ids
(no ``-`` or ``%``) come out unescaped.
"""

import re

from channel_shop.core.constants import SOURCE_KIND

_ESCAPES = {"%25": "%", "%2D": "-"}
_ESCAPE_RE = re.compile(r"%25|%2D")


def _escape(component: str) -> str:
    return component.replace("%", "%25").replace("-", "%2D")


def _unescape(component: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], component)


def identify(source_kind: str, channel_id: str, item_id: str, mode: str) -> str:
    """
    Derive the tracked identifier for one materialization.

    Args:
        source_kind: Source kind prefix (e.g. "youtube-channel")
        channel_id: Channel ID
        item_id: Video ID
        mode: Content mode value

    Returns:
        Identifier string
    """
    mode = getattr(mode, "value", mode)
    return "-".join((source_kind, _escape(channel_id), _escape(item_id), _escape(mode)))


def parse_identifier(identifier: str) -> tuple[str, str, str, str]:
    """
    Split an identifier back into (source_kind, channel_id, item_id, mode).

    Raises:
        ValueError: If the identifier has fewer than four components
    """
    parts = identifier.rsplit("-", 3)
    if len(parts) != 4:
        raise ValueError(f"Not a tracked identifier: {identifier!r}")
    source_kind, channel_id, item_id, mode = parts
    return source_kind, _unescape(channel_id), _unescape(item_id), _unescape(mode)


def identify_video(channel_id: str, video_id: str, mode: str) -> str:
    """Identifier for a video of a YouTube channel."""
    return identify(SOURCE_KIND, channel_id, video_id, mode)
