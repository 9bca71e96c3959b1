"""Locating cart items across the two identity fields."""
from typing import Optional, Sequence

from .models import CartItem

NOT_FOUND = -1


def _same(a: Optional[str], b: Optional[str]) -> bool:
    # Two missing IDs are not a match
    return a is not None and a == b


def items_match(existing: CartItem, target: CartItem) -> bool:
    """
    True if any cross-field comparison holds:
    entity/entity, entity/product, product/entity, product/product.

    Upstream payloads are inconsistent about which field they populate, so
    the comparison is symmetric across both. IDs colliding between the two
    namespaces will match.
    """
    return (
        _same(existing.entity_id, target.entity_id)
        or _same(existing.entity_id, target.product_id)
        or _same(existing.product_id, target.entity_id)
        or _same(existing.product_id, target.product_id)
    )


def find_cart_item_index(items: Sequence[CartItem], target: CartItem) -> int:
    """Index of the first item equivalent to `target`, or NOT_FOUND."""
    for index, item in enumerate(items):
        if items_match(item, target):
            return index
    return NOT_FOUND


def item_has_id(item: CartItem, item_id: Optional[str]) -> bool:
    """True if either identity field of `item` equals `item_id`."""
    return _same(item.entity_id, item_id) or _same(item.product_id, item_id)


def find_item_index_by_id(items: Sequence[CartItem], item_id: Optional[str]) -> int:
    """Index of the first item whose entity or product ID equals `item_id`."""
    for index, item in enumerate(items):
        if item_has_id(item, item_id):
            return index
    return NOT_FOUND
