"""
Cart Store - owns the cart state and drives operation lifecycles.

Every mutation goes through `dispatch`, which runs on the event loop thread,
so transitions never interleave. Operations themselves are not serialized:
several may be in flight and the last one to settle wins.
"""
import asyncio
from typing import Any, Awaitable, Callable, Optional, Protocol

from cartstate.errors import UserNotLoggedInError, extract_error_payload
from cartstate.logging import get_logger, loggable_id

from .events import (
    CartEvent,
    CartOperation,
    ClearCart,
    OperationFulfilled,
    OperationPending,
    OperationRejected,
    SettledEvent,
    UpdateCartItemLocally,
)
from .models import CartResponse, CartSnapshot, CartState
from .reducer import reduce_cart

logger = get_logger(__name__)

Listener = Callable[[CartSnapshot], None]


class CartService(Protocol):
    """Remote cart service contract. Responses arrive already normalized."""

    async def get_cart(self, user_id: str) -> CartResponse: ...

    async def add_to_cart(self, user_id: str, product_id: str, quantity: int) -> CartResponse: ...

    async def update_cart_item(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        cart_item_id: Optional[str] = None,
    ) -> CartResponse: ...

    async def remove_from_cart(self, user_id: str, product_id: str) -> CartResponse: ...


class CartStore:
    """
    In-memory cart state for one session.

    Features:
    - Four async operations (fetch/add/update/remove) with pending/settle transitions
    - Two synchronous local actions (clear, optimistic quantity update)
    - Snapshot subscriptions for UI re-rendering
    """

    def __init__(self, service: CartService, initial_state: Optional[CartState] = None):
        self.service = service
        self._state = initial_state or CartState()
        self._listeners: list[Listener] = []
        self._tasks: set[asyncio.Task] = set()

    # ==================== STATE ====================

    @property
    def state(self) -> CartSnapshot:
        """Read-only snapshot of the current state."""
        return CartSnapshot.from_state(self._state)

    @property
    def in_flight(self) -> int:
        """Number of operations scheduled via submit() that have not settled."""
        return len(self._tasks)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with a snapshot after every transition.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: CartEvent) -> CartSnapshot:
        """Apply one event atomically and notify listeners."""
        self._state = reduce_cart(self._state, event)
        snapshot = self.state
        logger.debug(
            "%s -> status=%s loading=%s items=%d",
            type(event).__name__,
            snapshot.status.value,
            snapshot.loading,
            len(snapshot.items),
        )
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.warning(f"Cart listener failed: {e}", exc_info=True)
        return snapshot

    # ==================== LOCAL ACTIONS ====================

    def clear_cart(self) -> CartSnapshot:
        """Drop all items locally. Status, error and loading are untouched."""
        return self.dispatch(ClearCart())

    def update_cart_item_locally(self, product_id: Optional[str], quantity: Any) -> CartSnapshot:
        """Optimistically set an item's quantity ahead of a confirming request."""
        return self.dispatch(UpdateCartItemLocally(product_id=product_id, quantity=quantity))

    # ==================== OPERATIONS ====================

    async def _run(
        self,
        operation: CartOperation,
        user_id: Optional[str],
        call: Callable[[], Awaitable[CartResponse]],
        product_id: Optional[str] = None,
    ) -> SettledEvent:
        """Run one operation lifecycle: pending, then fulfilled or rejected."""
        self.dispatch(OperationPending(operation))
        try:
            if not user_id:
                raise UserNotLoggedInError()
            response = await call()
        except Exception as e:
            settled = OperationRejected(operation, extract_error_payload(e))
            if operation is CartOperation.UPDATE_CART_ITEM:
                logger.error("Cart update failed: %s", settled.error)
            else:
                logger.warning(
                    "%s failed for user %s: %s",
                    operation.value,
                    loggable_id(user_id),
                    settled.error,
                )
        else:
            settled = OperationFulfilled(operation, response, product_id)
        self.dispatch(settled)
        return settled

    async def fetch_cart(self, user_id: Optional[str]) -> SettledEvent:
        """Load the user's cart from the service."""
        return await self._run(
            CartOperation.FETCH_CART,
            user_id,
            lambda: self.service.get_cart(user_id),
        )

    async def add_to_cart(
        self, user_id: Optional[str], product_id: str, quantity: int = 1
    ) -> SettledEvent:
        """Add a product; merge the returned cart or item."""
        return await self._run(
            CartOperation.ADD_TO_CART,
            user_id,
            lambda: self.service.add_to_cart(user_id, product_id, quantity),
            product_id,
        )

    async def update_cart_item(
        self,
        user_id: Optional[str],
        product_id: str,
        quantity: int,
        cart_item_id: Optional[str] = None,
    ) -> SettledEvent:
        """Set the quantity of an item on the service; merge the result."""
        return await self._run(
            CartOperation.UPDATE_CART_ITEM,
            user_id,
            lambda: self.service.update_cart_item(user_id, product_id, quantity, cart_item_id),
            product_id,
        )

    async def remove_from_cart(self, user_id: Optional[str], product_id: str) -> SettledEvent:
        """Remove a product; filter locally when the service returns no cart."""
        return await self._run(
            CartOperation.REMOVE_FROM_CART,
            user_id,
            lambda: self.service.remove_from_cart(user_id, product_id),
            product_id,
        )

    # ==================== SCHEDULING ====================

    def submit(self, operation: Awaitable[SettledEvent]) -> "asyncio.Task[SettledEvent]":
        """
        Schedule an operation without awaiting it.

        Example:
            store.submit(store.add_to_cart(user_id, "sku-1", 2))
        """
        task = asyncio.ensure_future(operation)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait until every submitted operation has settled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
