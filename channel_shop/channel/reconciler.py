"""Reconciler: turns a filtered catalog snapshot into a change set.

Videos do not change after publishing, so an identifier already present in
the prior state is never re-fetched. The only actions produced are ``add``
for new identifiers and ``delete`` for identifiers that disappeared.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from channel_shop.channel.identity import identify
from channel_shop.channel.schemas import CatalogItem, ChangeSet, ContentMode, FileUpdate
from channel_shop.core.constants import SOURCE_KIND
from channel_shop.core.logging_config import get_logger

logger = get_logger(__name__)

# (item, mode) -> payload
ContentFetcherFn = Callable[[CatalogItem, ContentMode], str]

# identifier -> opaque last-seen marker
PriorState = Mapping[str, Any]


def reconcile(
    filtered_items: Iterable[CatalogItem],
    prior_state: PriorState,
    mode: ContentMode,
    fetch_content: ContentFetcherFn,
    *,
    channel_id: str,
    no_delete: bool = False,
    source_kind: str = SOURCE_KIND,
) -> ChangeSet:
    """
    Compute the change set for one sync pass.

    Args:
        filtered_items: Items that passed the filter policy
        prior_state: Identifiers currently materialized by the host
        mode: Content mode of this shop
        fetch_content: Produces the payload for a new item
        channel_id: Channel the items belong to
        no_delete: Keep previously added identifiers even if they vanished
        source_kind: Identifier prefix

    Returns:
        Mapping of identifier to add/delete update; untouched identifiers
        are omitted
    """
    changes: ChangeSet = {}
    current_ids: set[str] = set()

    for item in filtered_items:
        identifier = identify(source_kind, channel_id, item.item_id, mode)
        if identifier in current_ids:
            continue
        current_ids.add(identifier)

        if identifier in prior_state:
            continue

        content = fetch_content(item, mode)
        changes[identifier] = FileUpdate(action="add", content=content)

    if no_delete:
        logger.debug("noDelete set, skipping deletion detection")
    else:
        for identifier in prior_state:
            if identifier not in current_ids:
                changes[identifier] = FileUpdate(action="delete")

    return changes


def apply_change_set(prior_state: PriorState, change_set: ChangeSet, marker: Any) -> dict[str, Any]:
    """
    Return the state a host holds after persisting ``change_set``.

    Args:
        prior_state: State before the pass
        change_set: Changes from ``reconcile``
        marker: Last-seen marker recorded for added/updated identifiers

    Returns:
        New state mapping (``prior_state`` is not modified)
    """
    state = dict(prior_state)
    for identifier, update in change_set.items():
        if update.action == "delete":
            state.pop(identifier, None)
        else:
            state[identifier] = marker
    return state
