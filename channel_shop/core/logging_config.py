"""Structured logging configuration for the channel shop."""

import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from channel_shop.core.exceptions import ConfigurationError

# stderr, so change set JSON on stdout stays clean
console = Console(stderr=True)

ROOT_LOGGER_NAME = "channel_shop"

FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Held at WARNING or above
NOISY_LOGGERS = ("urllib3", "requests")


def _resolve_level(level: str) -> int:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ConfigurationError(f"Unknown log level: {level}", field="log_level")
    return resolved


def _console_handler(level: int, rich_tracebacks: bool) -> logging.Handler:
    handler = RichHandler(
        console=console,
        level=level,
        rich_tracebacks=rich_tracebacks,
        tracebacks_show_locals=level <= logging.DEBUG,
        markup=False,
        show_path=level <= logging.DEBUG,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _file_handler(log_file: Path | str) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Path | str | None = None,
    rich_tracebacks: bool = True,
) -> logging.Logger:
    """
    Install handlers on the ``channel_shop`` logger.

    Calling it again replaces the previous handlers. The file handler, when
    configured, always records DEBUG.

    Args:
        level: Console level name (DEBUG, INFO, ...)
        log_file: Optional path to a log file
        rich_tracebacks: Render exceptions with rich

    Returns:
        The configured ``channel_shop`` logger

    Raises:
        ConfigurationError: Unknown level name
    """
    console_level = _resolve_level(level)

    shop_logger = logging.getLogger(ROOT_LOGGER_NAME)
    shop_logger.handlers.clear()
    shop_logger.addHandler(_console_handler(console_level, rich_tracebacks))
    if log_file:
        shop_logger.addHandler(_file_handler(log_file))
        shop_logger.setLevel(logging.DEBUG)
    else:
        shop_logger.setLevel(console_level)
    shop_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(console_level, logging.WARNING))

    shop_logger.debug(f"📝 Logging initialized (level={level.upper()}, file={log_file})")
    return shop_logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger under the ``channel_shop`` hierarchy.

    Child loggers are not configured here; they propagate to the root shop
    logger, so handlers only have to be installed once by ``setup_logging``.

    Args:
        name: Logger name, either a bare suffix ("reconciler") or a dotted
            module path ("channel_shop.channel.reconciler")

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def log_sync_event(
    logger_instance: logging.Logger,
    channel_id: str,
    mode: str,
    event: str,
    items_listed: int | None = None,
    items_kept: int | None = None,
    added: int | None = None,
    deleted: int | None = None,
    error: str | None = None,
) -> None:
    """
    Log channel sync pass events.

    Args:
        logger_instance: Logger to use
        channel_id: YouTube channel ID
        mode: Content mode of the pass
        event: Event type (started, completed, failed)
        items_listed: Number of catalog items listed
        items_kept: Number of items surviving the filters
        added: Number of add entries emitted
        deleted: Number of delete entries emitted
        error: Error message if failed
    """
    extra: dict[str, Any] = {
        "channel_id": channel_id,
        "mode": mode,
        "event": event,
    }

    if items_listed is not None:
        extra["items_listed"] = items_listed
    if items_kept is not None:
        extra["items_kept"] = items_kept
    if added is not None:
        extra["added"] = added
    if deleted is not None:
        extra["deleted"] = deleted
    if error:
        extra["error"] = error

    if event == "failed":
        logger_instance.error(f"❌ Channel sync failed: {channel_id} ({error})", extra=extra)
    elif event == "completed":
        logger_instance.info(
            f"✅ Channel sync complete: {channel_id} "
            f"({items_kept}/{items_listed} kept, +{added} -{deleted})",
            extra=extra,
        )
    else:
        logger_instance.info(f"🔄 Channel sync {event}: {channel_id} [{mode}]", extra=extra)


def log_content_event(
    logger_instance: logging.Logger,
    video_id: str,
    mode: str,
    event: str,
    error: str | None = None,
) -> None:
    """
    Log per-item content events.

    ``fallback`` and ``placeholder`` events are warnings so degraded items
    stand apart from regular ``fetched`` ones.

    Args:
        logger_instance: Logger to use
        video_id: YouTube video ID
        mode: Content mode
        event: Event type (fetched, fallback, placeholder)
        error: Underlying error for fallback events
    """
    extra: dict[str, Any] = {
        "video_id": video_id,
        "mode": mode,
        "event": event,
    }
    if error:
        extra["error"] = error

    if event == "fallback":
        logger_instance.warning(
            f"⚠️ {mode} unavailable for {video_id}, using fallback: {error}", extra=extra
        )
    elif event == "placeholder":
        logger_instance.warning(f"⚠️ {mode} not implemented, placeholder for {video_id}", extra=extra)
    else:
        logger_instance.debug(f"📝 {mode} fetched: {video_id}", extra=extra)
