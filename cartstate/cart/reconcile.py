"""
Cart reconciliation: fold a service response into the current item list.

Each function takes the current items plus a normalized response and returns
the next items. Inputs are never mutated.
"""
from typing import Any, Optional, Sequence, Tuple

from .matching import NOT_FOUND, find_cart_item_index, find_item_index_by_id, item_has_id
from .models import CartItem, CartResponse, ItemResponse, ItemsResponse

Items = Tuple[CartItem, ...]


def _replace_at(items: Sequence[CartItem], index: int, item: CartItem) -> Items:
    updated = list(items)
    updated[index] = item
    return tuple(updated)


def reconcile_fetch(items: Sequence[CartItem], response: CartResponse) -> Items:
    """The fetched cart replaces local items; any other shape empties the cart."""
    if isinstance(response, ItemsResponse):
        return tuple(response.items)
    return ()


def reconcile_add(items: Sequence[CartItem], response: CartResponse) -> Items:
    """
    Full cart replaces items wholesale. A single item replaces its match in
    place, or is appended when nothing matches.
    """
    if isinstance(response, ItemsResponse):
        return tuple(response.items)
    if isinstance(response, ItemResponse):
        index = find_cart_item_index(items, response.item)
        if index != NOT_FOUND:
            return _replace_at(items, index, response.item)
        return (*items, response.item)
    return tuple(items)


def reconcile_update(items: Sequence[CartItem], response: CartResponse) -> Items:
    """Like reconcile_add, except an unmatched single item is dropped."""
    if isinstance(response, ItemsResponse):
        return tuple(response.items)
    if isinstance(response, ItemResponse):
        index = find_cart_item_index(items, response.item)
        if index != NOT_FOUND:
            return _replace_at(items, index, response.item)
    return tuple(items)


def reconcile_remove(
    items: Sequence[CartItem], response: CartResponse, product_id: Optional[str]
) -> Items:
    """
    Full cart replaces items wholesale. Otherwise drop every item whose
    entity or product ID equals the removed `product_id`.
    """
    if isinstance(response, ItemsResponse):
        return tuple(response.items)
    return tuple(item for item in items if not item_has_id(item, product_id))


def update_quantity_locally(
    items: Sequence[CartItem], product_id: Optional[str], quantity: Any
) -> Items:
    """Overwrite the quantity of the first item matching `product_id`, if any."""
    index = find_item_index_by_id(items, product_id)
    if index == NOT_FOUND:
        return tuple(items)
    return _replace_at(items, index, items[index].with_quantity(quantity))
