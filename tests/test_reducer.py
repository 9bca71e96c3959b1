"""
Tests for pure state transitions
"""

import pytest

from cartstate.cart import CartItem, CartOperation, CartState, CartStatus, EmptyResponse, ItemsResponse
from cartstate.cart.events import (
    ClearCart,
    OperationFulfilled,
    OperationPending,
    OperationRejected,
)
from cartstate.cart.reducer import reduce_cart
from cartstate.cart.totals import calculate_total


class TestPending:
    @pytest.mark.parametrize("operation", [CartOperation.FETCH_CART, CartOperation.ADD_TO_CART])
    def test_foreground_operations_set_status(self, operation):
        state = reduce_cart(CartState(), OperationPending(operation))

        assert state.status is CartStatus.LOADING
        assert state.loading is True

    @pytest.mark.parametrize(
        "operation", [CartOperation.UPDATE_CART_ITEM, CartOperation.REMOVE_FROM_CART]
    )
    def test_background_operations_keep_status(self, operation):
        start = CartState(status=CartStatus.SUCCEEDED)
        state = reduce_cart(start, OperationPending(operation))

        assert state.status is CartStatus.SUCCEEDED
        assert state.loading is True


class TestSettled:
    @pytest.mark.parametrize("operation", list(CartOperation))
    def test_fulfilled_recomputes_total(self, operation):
        items = (CartItem(entity_id="a", price="3", quantity=3),)
        start = CartState(status=CartStatus.LOADING, loading=True, error="old")

        state = reduce_cart(start, OperationFulfilled(operation, ItemsResponse(items=items), "a"))

        assert state.items == items
        assert state.total == calculate_total(items) == 9
        assert state.status is CartStatus.SUCCEEDED
        assert state.loading is False
        assert state.error is None

    @pytest.mark.parametrize("operation", list(CartOperation))
    def test_rejected_uses_default_error(self, operation):
        state = reduce_cart(CartState(loading=True), OperationRejected(operation, None))

        assert state.status is CartStatus.FAILED
        assert state.loading is False
        assert state.error == operation.default_error

    def test_fetch_with_empty_response_empties_cart(self, sample_items):
        start = CartState(items=sample_items, total=calculate_total(sample_items))
        state = reduce_cart(start, OperationFulfilled(CartOperation.FETCH_CART, EmptyResponse()))

        assert state.items == ()
        assert state.total == 0


def test_clear_cart_only_touches_items_and_total(sample_items):
    start = CartState(
        items=sample_items,
        total=calculate_total(sample_items),
        status=CartStatus.FAILED,
        error="down",
    )
    state = reduce_cart(start, ClearCart())

    assert state == CartState(status=CartStatus.FAILED, error="down")


def test_unknown_event_rejected():
    with pytest.raises(TypeError):
        reduce_cart(CartState(), object())
