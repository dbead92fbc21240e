"""Custom exceptions for the channel shop."""


class ShopError(Exception):
    """Base exception for channel shop errors."""

    pass


class ConfigurationError(ShopError):
    """Invalid or missing configuration value.

    Fatal: raised at initialization (or when a value is first parsed) and
    aborts the run. ``field`` names the offending option so the caller can
    point the user at it.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class CatalogError(ShopError):
    """Failed to list the channel catalog."""

    pass


class ContentFetchError(ShopError):
    """Failed to produce content for a catalog item."""

    pass
