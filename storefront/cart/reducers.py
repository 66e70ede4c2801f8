"""
Cart reducers.

Pure functions mapping (items, settled payload) -> new items. The store calls
exactly one of them per successful settlement and recomputes the total from
the returned tuple.
"""
from typing import Iterable, Optional, Tuple

from .models import CartItem, ItemId

Items = Tuple[CartItem, ...]


def replace_items(fetched: Iterable[CartItem]) -> Items:
    """Full replace from a fetch; first occurrence wins on duplicate ids."""
    seen: set = set()
    result = []
    for item in fetched:
        if item.id in seen or item.quantity < 1:
            continue
        seen.add(item.id)
        result.append(item)
    return tuple(result)


def merge_added_item(items: Items, added: CartItem) -> Items:
    """Insert the added line, or replace the local line with the same id.

    The remote returns the merged line, so its quantity is already the total
    for that line.
    """
    if added.quantity < 1:
        return remove_item(items, added.id)
    if any(item.id == added.id for item in items):
        return tuple(added if item.id == added.id else item for item in items)
    return items + (added,)


def merge_updated_item(items: Items, item_id: ItemId, fields: Optional[dict]) -> Items:
    """Merge updated fields into the line with ``item_id``.

    Unknown id or empty response leaves items untouched.
    """
    if not fields:
        return items
    result = []
    for item in items:
        if item.id == item_id:
            item = item.merge(fields)
            if item.quantity < 1:
                continue
        result.append(item)
    return tuple(result)


def remove_item(items: Items, item_id: ItemId) -> Items:
    """Drop the line with ``item_id``; no-op when absent."""
    return tuple(item for item in items if item.id != item_id)


def clear_items(items: Items) -> Items:
    return ()
