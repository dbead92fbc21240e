"""Core package for the channel shop."""

from channel_shop.core.config import (
    Settings,
    get_credentials,
    get_settings,
    load_shop_config,
    load_yaml_config,
)
from channel_shop.core.exceptions import (
    CatalogError,
    ConfigurationError,
    ContentFetchError,
    ShopError,
)
from channel_shop.core.http_session import close_all_sessions, get, get_session
from channel_shop.core.logging_config import (
    get_logger,
    log_content_event,
    log_sync_event,
    setup_logging,
)

__all__ = [
    "Settings",
    "get_settings",
    "get_credentials",
    "load_yaml_config",
    "load_shop_config",
    # Errors
    "ShopError",
    "ConfigurationError",
    "CatalogError",
    "ContentFetchError",
    # Logging
    "setup_logging",
    "get_logger",
    "log_sync_event",
    "log_content_event",
    # HTTP
    "get_session",
    "close_all_sessions",
    "get",
]
