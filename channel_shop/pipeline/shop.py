"""Channel shop: list -> filter -> reconcile, behind a host-facing contract."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from channel_shop.channel.catalog import YouTubeCatalog
from channel_shop.channel.filters import apply_filters
from channel_shop.channel.reconciler import ContentFetcherFn, PriorState, reconcile
from channel_shop.channel.schemas import CatalogItem, ChangeSet, ShopConfig, SyncResult
from channel_shop.content.fetchers import ContentFetcher
from channel_shop.core.config import Settings, get_credentials, get_settings
from channel_shop.core.constants import (
    CREDENTIAL_YOUTUBE_API_KEY,
    YOUTUBE_API_KEY_INSTRUCTIONS,
)
from channel_shop.core.exceptions import ConfigurationError
from channel_shop.core.logging_config import get_logger, log_sync_event

logger = get_logger(__name__)


class Shop(ABC):
    """Contract a host pipeline uses to drive one content source."""

    @abstractmethod
    def required_credentials(self) -> dict[str, str]:
        """Map each credential name to instructions for obtaining it."""

    @abstractmethod
    def init(self, credentials: Mapping[str, str], config: Mapping[str, Any]) -> None:
        """Validate credentials and configuration; raise ConfigurationError on failure."""

    @abstractmethod
    def update(self, last_used: float | None, existing_files: PriorState) -> ChangeSet:
        """Compute the change set against the files the host currently holds."""


class YouTubeChannelShop(Shop):
    """
    Shop that mirrors a YouTube channel's videos.

    Steps of ``update``:
    1. List every video of the channel (YouTube Data API)
    2. Apply the filter policy
    3. Reconcile against the host's existing files

    The catalog and content fetcher can be injected; otherwise they are
    built from the credentials at ``init``.
    """

    def __init__(
        self,
        catalog: Any | None = None,
        fetcher: ContentFetcherFn | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.settings = settings or get_settings()
        self.catalog = catalog
        self.fetcher = fetcher
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.config: ShopConfig | None = None
        self.last_result: SyncResult | None = None

    def required_credentials(self) -> dict[str, str]:
        return {CREDENTIAL_YOUTUBE_API_KEY: YOUTUBE_API_KEY_INSTRUCTIONS}

    def init(self, credentials: Mapping[str, str], config: Mapping[str, Any] | ShopConfig) -> None:
        """
        Initialize the shop with credentials and configuration.

        Args:
            credentials: Credential name -> secret
            config: Raw shop options or an already validated ShopConfig

        Raises:
            ConfigurationError: Missing credential or invalid option
        """
        api_key = credentials.get(CREDENTIAL_YOUTUBE_API_KEY)
        if not api_key:
            raise ConfigurationError(
                "YouTube API key is required.", field=CREDENTIAL_YOUTUBE_API_KEY
            )

        self.config = config if isinstance(config, ShopConfig) else ShopConfig.from_config(config)

        if self.catalog is None:
            self.catalog = YouTubeCatalog(api_key, settings=self.settings)
        if self.fetcher is None:
            self.fetcher = ContentFetcher(
                include_header=self.config.include_header,
                languages=self.settings.youtube_api_languages,
            )

        logger.debug(
            f"Shop initialized for {self.config.channel_id} (mode={self.config.mode.value})"
        )

    def update(self, last_used: float | None, existing_files: PriorState) -> ChangeSet:
        """
        Compute the change set for the configured channel.

        A failed pass returns an empty change set so the host can simply
        retry on its next run. Configuration errors still propagate.

        Args:
            last_used: Host's last run timestamp (unused; listing is exhaustive)
            existing_files: Identifiers previously contributed by this shop

        Returns:
            Change set (identifier -> add/delete)
        """
        if self.config is None or self.catalog is None or self.fetcher is None:
            raise ConfigurationError("Shop.update called before init", field="config")

        config = self.config
        log_sync_event(logger, config.channel_id, config.mode.value, "started")

        try:
            change_set, result = self._run(existing_files)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.exception("Error in update")
            log_sync_event(logger, config.channel_id, config.mode.value, "failed", error=str(e))
            self.last_result = None
            return {}

        self.last_result = result
        log_sync_event(
            logger,
            config.channel_id,
            config.mode.value,
            "completed",
            items_listed=result.items_listed,
            items_kept=result.items_kept,
            added=result.added,
            deleted=result.deleted,
        )
        return change_set

    def _run(self, existing_files: PriorState) -> tuple[ChangeSet, SyncResult]:
        assert self.config is not None and self.catalog is not None and self.fetcher is not None
        config = self.config

        videos: list[CatalogItem] = self.catalog.list_videos(config.channel_id)
        kept = apply_filters(videos, config, self.clock())

        change_set = reconcile(
            kept,
            existing_files,
            config.mode,
            self.fetcher,
            channel_id=config.channel_id,
            no_delete=config.no_delete,
        )

        result = SyncResult.from_change_set(
            channel_id=config.channel_id,
            mode=config.mode,
            items_listed=len(videos),
            items_kept=len(kept),
            change_set=change_set,
        )
        return change_set, result


def run_update(
    config: Mapping[str, Any] | ShopConfig,
    prior_state: PriorState | None = None,
    credentials: Mapping[str, str] | None = None,
    **shop_kwargs: Any,
) -> tuple[ChangeSet, SyncResult | None]:
    """
    Convenience function to run one sync pass.

    Args:
        config: Shop options
        prior_state: Existing identifiers (empty if None)
        credentials: Credential mapping (defaults to settings)
        **shop_kwargs: Passed to YouTubeChannelShop (catalog, fetcher, clock, ...)

    Returns:
        (change set, sync result or None if the pass failed)
    """
    shop = YouTubeChannelShop(**shop_kwargs)
    shop.init(credentials if credentials is not None else get_credentials(shop.settings), config)
    change_set = shop.update(None, prior_state or {})
    return change_set, shop.last_result
