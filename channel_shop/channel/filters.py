"""Filter engine: decides which catalog items are eligible.

An item is kept only if it passes every configured predicate. Predicates are
independent and side-effect free, so their order only matters for which
rejection reason gets reported.
"""

from collections.abc import Callable, Iterable
from datetime import datetime

from channel_shop.channel.age import is_expired
from channel_shop.channel.schemas import CatalogItem, FilterConfig
from channel_shop.core.logging_config import get_logger

logger = get_logger(__name__)

Predicate = Callable[[CatalogItem, FilterConfig, datetime], bool]


def passes_title(item: CatalogItem, config: FilterConfig, now: datetime) -> bool:
    if config.title_includes is None:
        return True
    if item.title is None:
        return False
    return config.title_includes.search(item.title) is not None


def passes_start_date(item: CatalogItem, config: FilterConfig, now: datetime) -> bool:
    if config.start_date is None:
        return True
    return item.published_at >= config.start_date


def passes_min_duration(item: CatalogItem, config: FilterConfig, now: datetime) -> bool:
    if config.duration_more_than is None:
        return True
    return item.duration_seconds >= config.duration_more_than


def passes_max_duration(item: CatalogItem, config: FilterConfig, now: datetime) -> bool:
    if config.duration_less_than is None:
        return True
    return item.duration_seconds <= config.duration_less_than


def passes_expiry(item: CatalogItem, config: FilterConfig, now: datetime) -> bool:
    if config.drop_after is None:
        return True
    return not is_expired(now, item.published_at, config.drop_after)


PREDICATES: tuple[tuple[str, Predicate], ...] = (
    ("titleIncludes", passes_title),
    ("startDate", passes_start_date),
    ("durationMoreThan", passes_min_duration),
    ("durationLessThan", passes_max_duration),
    ("dropAfter", passes_expiry),
)


def rejection_reason(item: CatalogItem, config: FilterConfig, now: datetime) -> str | None:
    """
    Return the option name of the first predicate the item fails.

    Args:
        item: Catalog item
        config: Filter policy
        now: Current instant (for expiry)

    Returns:
        Option name (e.g. "durationLessThan") or None if the item passes
    """
    for name, predicate in PREDICATES:
        if not predicate(item, config, now):
            return name
    return None


def evaluate(item: CatalogItem, config: FilterConfig, now: datetime) -> bool:
    """Return True if ``item`` passes all configured predicates."""
    return rejection_reason(item, config, now) is None


def apply_filters(
    items: Iterable[CatalogItem], config: FilterConfig, now: datetime
) -> list[CatalogItem]:
    """
    Keep the items that pass the filter policy, preserving input order.

    Args:
        items: Catalog items
        config: Filter policy
        now: Current instant

    Returns:
        Surviving items
    """
    if config.is_unconstrained:
        return list(items)

    kept = []
    for item in items:
        reason = rejection_reason(item, config, now)
        if reason is None:
            kept.append(item)
        else:
            logger.debug(f"Filtered out {item.item_id} ({reason})")
    return kept
