"""Tests for the command line interface."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from channel_shop.channel.identity import identify_video
from channel_shop.cli import app
from channel_shop.core.config import Settings
from channel_shop.core.exceptions import CatalogError
from tests.conftest import CHANNEL_ID, FakeCatalog, RecordingFetcher, make_item

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "shop.yaml"
    path.write_text(f"channelId: {CHANNEL_ID}\nmode: video\n", encoding="utf-8")
    return path


@pytest.fixture
def fake_backend(settings):
    """Patch settings, catalog and fetcher used by the sync command."""
    catalog = FakeCatalog([make_item(item_id="v1"), make_item(item_id="v2")])
    fetcher = RecordingFetcher()
    with (
        patch("channel_shop.cli.get_settings", return_value=settings),
        patch("channel_shop.pipeline.shop.YouTubeCatalog", return_value=catalog),
        patch("channel_shop.pipeline.shop.ContentFetcher", return_value=fetcher),
    ):
        yield catalog


def test_credentials_command():
    """Test the credentials listing."""
    result = runner.invoke(app, ["credentials"])
    assert result.exit_code == 0
    assert "youtube_api_key" in result.output


def test_validate_command(config_file):
    """Test a valid config is displayed."""
    result = runner.invoke(app, ["validate", str(config_file)])
    assert result.exit_code == 0
    assert CHANNEL_ID in result.output
    assert "video" in result.output


def test_validate_invalid(tmp_path):
    """Test an invalid config exits with an error naming the option."""
    path = tmp_path / "bad.yaml"
    path.write_text("mode: video\n", encoding="utf-8")

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "channelId" in result.output


def test_sync_writes_output_and_state(tmp_path, config_file, fake_backend):
    """Test a sync pass writes the change set and updates the state file."""
    state = tmp_path / "state.json"
    gone = identify_video(CHANNEL_ID, "gone", "video")
    kept = identify_video(CHANNEL_ID, "v1", "video")
    state.write_text(json.dumps({gone: 1, kept: 1}), encoding="utf-8")
    output = tmp_path / "changes.json"

    result = runner.invoke(
        app,
        [
            "sync",
            str(config_file),
            "--state",
            str(state),
            "--output",
            str(output),
            "--write-state",
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(output.read_text(encoding="utf-8")) == {
        identify_video(CHANNEL_ID, "v2", "video"): {"action": "add", "content": "video:v2"},
        gone: {"action": "delete"},
    }
    new_state = json.loads(state.read_text(encoding="utf-8"))
    assert set(new_state) == {kept, identify_video(CHANNEL_ID, "v2", "video")}
    assert new_state[kept] == 1


def test_sync_without_state_prints_change_set(config_file, fake_backend):
    """Test the change set goes to stdout when no output file is given."""
    result = runner.invoke(app, ["sync", str(config_file)])

    assert result.exit_code == 0, result.output
    assert identify_video(CHANNEL_ID, "v1", "video") in result.output
    assert fake_backend.requested == [CHANNEL_ID]


def test_sync_missing_api_key(config_file):
    """Test sync refuses to run without an API key."""
    settings = Settings(_env_file=None, youtube_api_key=None)
    with patch("channel_shop.cli.get_settings", return_value=settings):
        result = runner.invoke(app, ["sync", str(config_file)])

    assert result.exit_code == 1
    assert "youtube_api_key" in result.output


def test_sync_failure_exits_nonzero(config_file, settings):
    """Test a failed pass is reported with a non-zero exit code."""
    catalog = FakeCatalog(error=CatalogError("YouTube API error 500: backendError"))
    with (
        patch("channel_shop.cli.get_settings", return_value=settings),
        patch("channel_shop.pipeline.shop.YouTubeCatalog", return_value=catalog),
    ):
        result = runner.invoke(app, ["sync", str(config_file)])

    assert result.exit_code == 1
    assert "Sync failed" in result.output


def test_sync_invalid_state_file(tmp_path, config_file, fake_backend):
    """Test a corrupt state file is rejected before listing."""
    state = tmp_path / "state.json"
    state.write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, ["sync", str(config_file), "--state", str(state)])

    assert result.exit_code == 1
    assert fake_backend.requested == []
