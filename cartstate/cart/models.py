"""Cart models: items, state, snapshots and normalized service responses."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Tuple, Union

from cartstate.money import ZERO, to_decimal, to_float, to_quantity

# Wire names of the two identity fields
ENTITY_ID_FIELD = "_id"
PRODUCT_ID_FIELD = "productId"


def _optional_id(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class CartItem:
    """
    Single item in the cart.

    Identity is an optional pair: upstream payloads populate either or both
    of `_id` (entity_id) and `productId` (product_id).
    """
    entity_id: Optional[str] = None
    product_id: Optional[str] = None
    price: Decimal = ZERO
    quantity: int = 0
    extra: dict = field(default_factory=dict)

    def __post_init__(self):
        # Normalize numeric fields; frozen, so go through object.__setattr__
        object.__setattr__(self, "price", to_decimal(self.price))
        object.__setattr__(self, "quantity", to_quantity(self.quantity))

    def with_quantity(self, quantity: Any) -> "CartItem":
        return replace(self, quantity=to_quantity(quantity))

    def to_dict(self) -> dict:
        """Convert to wire dictionary, extra fields first so identity wins."""
        data = dict(self.extra)
        if self.entity_id is not None:
            data[ENTITY_ID_FIELD] = self.entity_id
        if self.product_id is not None:
            data[PRODUCT_ID_FIELD] = self.product_id
        data["price"] = str(self.price)
        data["quantity"] = self.quantity
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from a service payload; unknown keys pass through in `extra`."""
        known = {ENTITY_ID_FIELD, PRODUCT_ID_FIELD, "price", "quantity"}
        return cls(
            entity_id=_optional_id(data.get(ENTITY_ID_FIELD)),
            product_id=_optional_id(data.get(PRODUCT_ID_FIELD)),
            price=data.get("price"),
            quantity=data.get("quantity"),
            extra={k: v for k, v in data.items() if k not in known},
        )


class CartStatus(str, Enum):
    """Lifecycle status of the cart state."""
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# ============================================================
# Normalized service responses
# ============================================================

@dataclass(frozen=True)
class ItemsResponse:
    """Service returned the full cart."""
    items: Tuple[CartItem, ...]


@dataclass(frozen=True)
class ItemResponse:
    """Service returned one item carrying an entity ID."""
    item: CartItem


@dataclass(frozen=True)
class EmptyResponse:
    """Service returned no usable body."""


CartResponse = Union[ItemsResponse, ItemResponse, EmptyResponse]


def _parse_items(raw_items: list) -> Tuple[CartItem, ...]:
    return tuple(CartItem.from_dict(raw) for raw in raw_items if isinstance(raw, dict))


def parse_cart_response(body: Any) -> CartResponse:
    """
    Normalize a cart service body into a CartResponse.

    Accepted shapes:
    - list of items -> ItemsResponse
    - {"items": [...]} -> ItemsResponse (an empty list is an empty cart)
    - {"_id": ..., ...} -> ItemResponse
    - anything else (None, "", unrelated object) -> EmptyResponse
    """
    if isinstance(body, list):
        return ItemsResponse(items=_parse_items(body))

    if isinstance(body, dict):
        raw_items = body.get("items")
        if isinstance(raw_items, list):
            return ItemsResponse(items=_parse_items(raw_items))
        if _optional_id(body.get(ENTITY_ID_FIELD)) is not None:
            return ItemResponse(item=CartItem.from_dict(body))

    return EmptyResponse()


# ============================================================
# State
# ============================================================

@dataclass(frozen=True)
class CartState:
    """Canonical cart state. Replaced wholesale on every transition."""
    items: Tuple[CartItem, ...] = ()
    total: Decimal = ZERO
    status: CartStatus = CartStatus.IDLE
    loading: bool = False
    error: Any = None


@dataclass(frozen=True)
class CartSnapshot:
    """Read-only view of CartState handed to the UI."""
    items: Tuple[CartItem, ...]
    total: Decimal
    status: CartStatus
    loading: bool
    error: Any

    @classmethod
    def from_state(cls, state: CartState) -> "CartSnapshot":
        return cls(
            items=state.items,
            total=state.total,
            status=state.status,
            loading=state.loading,
            error=state.error,
        )

    @property
    def item_count(self) -> int:
        """Total number of units in cart."""
        return sum(to_quantity(item.quantity) for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def to_dict(self) -> dict:
        """Convert to JSON-friendly dictionary for rendering."""
        return {
            "items": [item.to_dict() for item in self.items],
            "total": to_float(self.total),
            "item_count": self.item_count,
            "status": self.status.value,
            "loading": self.loading,
            "error": self.error,
        }
