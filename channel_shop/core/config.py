"""Configuration settings for the channel shop."""

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

from channel_shop.core.constants import (
    CREDENTIAL_YOUTUBE_API_KEY,
    SOURCE_KIND,
    YOUTUBE_API_BASE_URL,
    YOUTUBE_MAX_PAGE_SIZE,
)
from channel_shop.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    model_config = SettingsConfigDict(  # type: ignore[assignment]
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Allow extra env vars not defined in model
    )

    # Credentials
    youtube_api_key: str | None = None

    # YouTube Data API
    youtube_api_base_url: str = YOUTUBE_API_BASE_URL
    youtube_api_timeout: int = 30
    youtube_api_page_size: int = YOUTUBE_MAX_PAGE_SIZE

    # Transcripts
    youtube_api_languages: list[str] = ["en", "en-US", "en-GB"]

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_credentials(settings: Settings | None = None) -> dict[str, str]:
    """
    Build the credential mapping handed to ``Shop.init``.

    Only credentials that are actually set are included, so a missing key
    surfaces as a ``ConfigurationError`` from the shop rather than here.

    Args:
        settings: Settings to read from (defaults to cached settings)

    Returns:
        Mapping of credential name to secret
    """
    settings = settings or get_settings()
    credentials: dict[str, str] = {}
    if settings.youtube_api_key:
        credentials[CREDENTIAL_YOUTUBE_API_KEY] = settings.youtube_api_key
    return credentials


def load_yaml_config(config_path: Path | str) -> dict[str, Any]:
    """
    Load a YAML (or JSON) configuration file.

    Args:
        config_path: Path to the config file

    Returns:
        Dictionary with configuration values

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a mapping
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}", field="config")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse config file {path}: {e}", field="config") from e

    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Config file {path} must contain a mapping", field="config")
    return dict(data)


def extract_shop_section(config: Mapping[str, Any]) -> dict[str, Any]:
    """
    Return the shop options from a loaded config document.

    The options may sit at the top level or under a ``youtube-channel`` key
    (the layout used when one file configures several sources).
    """
    section = config.get(SOURCE_KIND)
    if isinstance(section, Mapping):
        return dict(section)
    return dict(config)


def load_shop_config(config_path: Path | str):
    """
    Load and validate shop options from a YAML/JSON file.

    Args:
        config_path: Path to config file

    Returns:
        Validated ShopConfig

    Raises:
        ConfigurationError: If the file or any option is invalid
    """
    from channel_shop.channel.schemas import ShopConfig

    return ShopConfig.from_config(extract_shop_section(load_yaml_config(config_path)))
