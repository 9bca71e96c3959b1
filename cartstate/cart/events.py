"""Messages dispatched into the cart store."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from cartstate.errors import (
    ERROR_ADD_TO_CART,
    ERROR_FETCH_CART,
    ERROR_REMOVE_FROM_CART,
    ERROR_UPDATE_CART_ITEM,
)

from .models import CartResponse


class CartOperation(str, Enum):
    """Asynchronous cart operations."""
    FETCH_CART = "cart/fetchCart"
    ADD_TO_CART = "cart/addToCart"
    UPDATE_CART_ITEM = "cart/updateCartItem"
    REMOVE_FROM_CART = "cart/removeFromCart"

    @property
    def default_error(self) -> str:
        """Error recorded when a rejection carries no payload."""
        return _DEFAULT_ERRORS[self]


_DEFAULT_ERRORS = {
    CartOperation.FETCH_CART: ERROR_FETCH_CART,
    CartOperation.ADD_TO_CART: ERROR_ADD_TO_CART,
    CartOperation.UPDATE_CART_ITEM: ERROR_UPDATE_CART_ITEM,
    CartOperation.REMOVE_FROM_CART: ERROR_REMOVE_FROM_CART,
}


@dataclass(frozen=True)
class OperationPending:
    operation: CartOperation


@dataclass(frozen=True)
class OperationFulfilled:
    """
    An operation settled successfully.

    `product_id` is the requested ID, needed by removeFromCart when the
    service returns no cart.
    """
    operation: CartOperation
    response: CartResponse
    product_id: Optional[str] = None


@dataclass(frozen=True)
class OperationRejected:
    operation: CartOperation
    error: Any = None


@dataclass(frozen=True)
class ClearCart:
    pass


@dataclass(frozen=True)
class UpdateCartItemLocally:
    product_id: Optional[str]
    quantity: Any


CartEvent = Union[
    OperationPending,
    OperationFulfilled,
    OperationRejected,
    ClearCart,
    UpdateCartItemLocally,
]

SettledEvent = Union[OperationFulfilled, OperationRejected]
