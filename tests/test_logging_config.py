"""Tests for logging setup and event helpers."""

import logging

import pytest

from channel_shop.core.exceptions import ConfigurationError
from channel_shop.core.logging_config import get_logger, log_sync_event, setup_logging


def test_get_logger_prefixes_names():
    """Test loggers always live under the channel_shop hierarchy."""
    assert get_logger("reconciler").name == "channel_shop.reconciler"
    assert get_logger("channel_shop.channel.catalog").name == "channel_shop.channel.catalog"
    assert get_logger().name == "channel_shop"


def test_setup_logging_level():
    """Test the console level is applied and handlers are replaced on re-setup."""
    logger = setup_logging("warning")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert logger.propagate is False

    setup_logging("DEBUG")
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_setup_logging_file(tmp_path):
    """Test the log file receives debug records even at INFO console level."""
    log_file = tmp_path / "logs" / "shop.log"
    logger = setup_logging("INFO", log_file=log_file)

    get_logger("test").debug("debug detail")
    for handler in logger.handlers:
        handler.flush()

    assert "debug detail" in log_file.read_text(encoding="utf-8")


def test_unknown_level():
    """Test a bogus level name is a configuration error."""
    with pytest.raises(ConfigurationError, match="Unknown log level") as exc_info:
        setup_logging("LOUD")
    assert exc_info.value.field == "log_level"


def test_sync_event_levels(caplog):
    """Test failed passes log at ERROR and carry structured fields."""
    logger = get_logger("test")
    with caplog.at_level(logging.INFO, logger="channel_shop"):
        log_sync_event(logger, "UCx", "video", "started")
        log_sync_event(logger, "UCx", "video", "failed", error="boom")

    started, failed = caplog.records
    assert started.levelno == logging.INFO
    assert failed.levelno == logging.ERROR
    assert (failed.channel_id, failed.mode, failed.error) == ("UCx", "video", "boom")
