"""Channel catalog filtering and reconciliation."""

from .age import ExpiryWindow, is_expired, parse_expiry
from .catalog import YouTubeCatalog, to_catalog_item
from .duration import parse_duration
from .filters import apply_filters, evaluate, rejection_reason
from .identity import identify, identify_video, parse_identifier
from .reconciler import apply_change_set, reconcile
from .schemas import (
    CatalogItem,
    ChangeSet,
    ContentMode,
    FileUpdate,
    FilterConfig,
    ShopConfig,
    SyncResult,
    dump_change_set,
)

__all__ = [
    # Duration / age
    "parse_duration",
    "ExpiryWindow",
    "parse_expiry",
    "is_expired",
    # Filters
    "evaluate",
    "apply_filters",
    "rejection_reason",
    # Identity
    "identify",
    "identify_video",
    "parse_identifier",
    # Reconciler
    "reconcile",
    "apply_change_set",
    # Catalog
    "YouTubeCatalog",
    "to_catalog_item",
    # Schemas
    "CatalogItem",
    "ChangeSet",
    "ContentMode",
    "FileUpdate",
    "FilterConfig",
    "ShopConfig",
    "SyncResult",
    "dump_change_set",
]
