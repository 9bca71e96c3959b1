"""Pure cart state transitions."""
from dataclasses import replace

from cartstate.money import ZERO

from .events import (
    CartEvent,
    CartOperation,
    ClearCart,
    OperationFulfilled,
    OperationPending,
    OperationRejected,
    UpdateCartItemLocally,
)
from .models import CartState, CartStatus
from .reconcile import (
    reconcile_add,
    reconcile_fetch,
    reconcile_remove,
    reconcile_update,
    update_quantity_locally,
)
from .totals import calculate_total

# Operations whose pending phase leaves status untouched
_BACKGROUND_OPERATIONS = frozenset({
    CartOperation.UPDATE_CART_ITEM,
    CartOperation.REMOVE_FROM_CART,
})


def _with_items(state: CartState, items) -> CartState:
    return replace(state, items=tuple(items), total=calculate_total(items))


def _reconcile(state: CartState, event: OperationFulfilled):
    operation = event.operation
    if operation is CartOperation.FETCH_CART:
        return reconcile_fetch(state.items, event.response)
    if operation is CartOperation.ADD_TO_CART:
        return reconcile_add(state.items, event.response)
    if operation is CartOperation.UPDATE_CART_ITEM:
        return reconcile_update(state.items, event.response)
    if operation is CartOperation.REMOVE_FROM_CART:
        return reconcile_remove(state.items, event.response, event.product_id)
    raise ValueError(f"Unknown cart operation: {operation!r}")


def reduce_cart(state: CartState, event: CartEvent) -> CartState:
    """
    Compute the next state for an event.

    Items and total always change together; failures keep prior items.
    """
    if isinstance(event, OperationPending):
        if event.operation in _BACKGROUND_OPERATIONS:
            return replace(state, loading=True)
        return replace(state, status=CartStatus.LOADING, loading=True)

    if isinstance(event, OperationFulfilled):
        next_state = _with_items(state, _reconcile(state, event))
        return replace(next_state, status=CartStatus.SUCCEEDED, loading=False, error=None)

    if isinstance(event, OperationRejected):
        return replace(
            state,
            status=CartStatus.FAILED,
            loading=False,
            error=event.error or event.operation.default_error,
        )

    if isinstance(event, ClearCart):
        return replace(state, items=(), total=ZERO)

    if isinstance(event, UpdateCartItemLocally):
        items = update_quantity_locally(state.items, event.product_id, event.quantity)
        if items == state.items:
            return state
        return _with_items(state, items)

    raise TypeError(f"Unsupported cart event: {type(event).__name__}")
