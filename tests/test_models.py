"""
Tests for cart models and response normalization
"""

from decimal import Decimal

from cartstate.cart import (
    CartItem,
    CartSnapshot,
    CartState,
    CartStatus,
    EmptyResponse,
    ItemResponse,
    ItemsResponse,
    parse_cart_response,
)


class TestCartItem:
    """Tests for CartItem."""

    def test_from_dict_maps_identity_fields(self):
        item = CartItem.from_dict({"_id": "a1", "productId": "p1", "price": "9.99", "quantity": "3"})

        assert item.entity_id == "a1"
        assert item.product_id == "p1"
        assert item.price == Decimal("9.99")
        assert item.quantity == 3

    def test_malformed_numbers_default_to_zero(self):
        item = CartItem.from_dict({"_id": "a1", "price": "free", "quantity": None})

        assert item.price == Decimal("0")
        assert item.quantity == 0

    def test_extra_fields_pass_through(self):
        """Unknown keys survive a from_dict/to_dict trip untouched."""
        data = {"_id": "a1", "price": 1, "quantity": 1, "name": "Mug", "image": {"url": "x"}}
        item = CartItem.from_dict(data)

        assert item.extra == {"name": "Mug", "image": {"url": "x"}}
        out = item.to_dict()
        assert out["name"] == "Mug"
        assert out["image"] == {"url": "x"}
        assert out["_id"] == "a1"
        assert "productId" not in out

    def test_numeric_ids_become_strings(self):
        item = CartItem.from_dict({"_id": 42, "productId": 7})
        assert item.entity_id == "42"
        assert item.product_id == "7"

    def test_with_quantity_returns_copy(self):
        item = CartItem(entity_id="a", price=2, quantity=1)
        updated = item.with_quantity("5")

        assert updated.quantity == 5
        assert item.quantity == 1


class TestParseCartResponse:
    """Tests for normalizing service bodies."""

    def test_items_object(self):
        response = parse_cart_response({"items": [{"_id": "a", "price": "10", "quantity": "2"}]})

        assert isinstance(response, ItemsResponse)
        assert response.items[0].entity_id == "a"

    def test_bare_list(self):
        response = parse_cart_response([{"productId": "p"}])

        assert isinstance(response, ItemsResponse)
        assert response.items[0].product_id == "p"

    def test_empty_items_is_empty_cart(self):
        assert parse_cart_response({"items": []}) == ItemsResponse(items=())

    def test_single_item(self):
        response = parse_cart_response({"_id": "a", "productId": "p", "quantity": 1})

        assert isinstance(response, ItemResponse)
        assert response.item.entity_id == "a"

    def test_single_item_without_entity_id_is_empty(self):
        assert isinstance(parse_cart_response({"productId": "p"}), EmptyResponse)

    def test_no_body(self):
        assert isinstance(parse_cart_response(None), EmptyResponse)
        assert isinstance(parse_cart_response(""), EmptyResponse)
        assert isinstance(parse_cart_response({"message": "ok"}), EmptyResponse)


class TestCartSnapshot:
    """Tests for CartSnapshot."""

    def test_initial_state(self):
        snapshot = CartSnapshot.from_state(CartState())

        assert snapshot.items == ()
        assert snapshot.total == 0
        assert snapshot.status is CartStatus.IDLE
        assert snapshot.loading is False
        assert snapshot.error is None
        assert snapshot.is_empty

    def test_to_dict(self, sample_items):
        state = CartState(items=sample_items, total=Decimal("25.5"), status=CartStatus.SUCCEEDED)
        data = CartSnapshot.from_state(state).to_dict()

        assert data["total"] == 25.5
        assert data["item_count"] == 3
        assert data["status"] == "succeeded"
        assert data["items"][1]["name"] == "Mug"
