"""Cart package: models, reconciliation, and the state store."""
from .events import CartOperation, OperationFulfilled, OperationRejected
from .matching import NOT_FOUND, find_cart_item_index, find_item_index_by_id
from .models import (
    CartItem,
    CartResponse,
    CartSnapshot,
    CartState,
    CartStatus,
    EmptyResponse,
    ItemResponse,
    ItemsResponse,
    parse_cart_response,
)
from .store import CartService, CartStore
from .totals import calculate_total

__all__ = [
    "CartItem",
    "CartOperation",
    "CartResponse",
    "CartService",
    "CartSnapshot",
    "CartState",
    "CartStatus",
    "CartStore",
    "EmptyResponse",
    "ItemResponse",
    "ItemsResponse",
    "NOT_FOUND",
    "OperationFulfilled",
    "OperationRejected",
    "calculate_total",
    "find_cart_item_index",
    "find_item_index_by_id",
    "parse_cart_response",
]
