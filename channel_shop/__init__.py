"""Channel Shop - mirror a YouTube channel's catalog into a local store."""

from channel_shop.channel import reconcile
from channel_shop.pipeline import YouTubeChannelShop, run_update

__version__ = "0.1.0"
__all__ = ["YouTubeChannelShop", "reconcile", "run_update"]
