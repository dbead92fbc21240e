"""Pipeline orchestration module."""

from channel_shop.pipeline.shop import Shop, YouTubeChannelShop, run_update

__all__ = ["Shop", "YouTubeChannelShop", "run_update"]
