"""Tests for tracked identifiers."""

import itertools

import pytest

from channel_shop.channel.identity import identify, identify_video, parse_identifier
from channel_shop.channel.schemas import ContentMode


def test_plain_format():
    """Test ids without dashes keep the plain layout."""
    assert (
        identify("youtube-channel", "UCabc", "vid1", "video")
        == "youtube-channel-UCabc-vid1-video"
    )


def test_enum_mode_uses_value():
    """Test ContentMode members render as their value."""
    assert identify_video("UCabc", "vid1", ContentMode.TRANSCRIPT) == identify_video(
        "UCabc", "vid1", "transcript"
    )
    assert identify_video("UCabc", "vid1", ContentMode.TRANSCRIPT).endswith("-transcript")


def test_deterministic():
    """Test the same tuple always gives the same identifier."""
    assert identify("k", "c", "i", "m") == identify("k", "c", "i", "m")


def test_dash_in_components_does_not_collide():
    """Test ids that would collide under naive joining stay distinct."""
    a = identify("youtube-channel", "UC-a", "b", "video")
    b = identify("youtube-channel", "UC", "a-b", "video")
    assert a != b
    assert parse_identifier(a) == ("youtube-channel", "UC-a", "b", "video")
    assert parse_identifier(b) == ("youtube-channel", "UC", "a-b", "video")


def test_injective_over_tricky_components():
    """Test distinct tuples never share an identifier."""
    kinds = ["youtube-channel", "yt", "a-", ""]
    channels = ["UC", "UC-x", "%2D", "-", ""]
    items = ["v", "v-1", "%", "%25", "-x"]
    modes = ["video", "metadata", "a-b"]

    seen: dict[str, tuple[str, str, str, str]] = {}
    for combo in itertools.product(kinds, channels, items, modes):
        identifier = identify(*combo)
        assert identifier not in seen, f"{combo} collides with {seen[identifier]}"
        seen[identifier] = combo
        assert parse_identifier(identifier) == combo


def test_modes_and_channels_are_distinct():
    """Test different modes or channels for one item give different ids."""
    by_mode = {identify_video("UCabc", "vid1", mode) for mode in ContentMode}
    assert len(by_mode) == len(ContentMode)
    assert identify_video("UCone", "vid1", "video") != identify_video("UCtwo", "vid1", "video")


def test_parse_rejects_short_strings():
    """Test strings with fewer than four parts are rejected."""
    with pytest.raises(ValueError, match="Not a tracked identifier"):
        parse_identifier("a-b-c")
