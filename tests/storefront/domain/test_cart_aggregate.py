"""Tests for the ShoppingCart aggregate and its lines."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.cart.cart import ShoppingCart
from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated


@pytest.fixture()
def cart():
    cart = ShoppingCart.create(user_id="user-001")
    cart._events.clear()
    return cart


class TestCartCreation:
    def test_create_with_user_id(self):
        cart = ShoppingCart.create(user_id="user-001")
        assert str(cart.user_id) == "user-001"

    def test_create_starts_with_empty_items(self):
        cart = ShoppingCart.create(user_id="user-001")
        assert len(cart.items) == 0

    def test_create_sets_timestamps(self):
        cart = ShoppingCart.create(user_id="user-001")
        assert cart.created_at is not None
        assert cart.updated_at is not None


class TestAddItem:
    def test_add_new_line(self, cart):
        item, created = cart.add_item(product_id="prod-a", size="42", quantity=2)

        assert created is True
        assert len(cart.items) == 1
        assert item.quantity == 2
        assert item.size == "42"
        assert item.added_at is not None

    def test_same_product_and_size_increments_quantity(self, cart):
        first, _ = cart.add_item(product_id="prod-a", size="42", quantity=2)
        second, created = cart.add_item(product_id="prod-a", size="42", quantity=3)

        assert created is False
        assert len(cart.items) == 1
        assert second.id == first.id
        assert cart.items[0].quantity == 5

    def test_different_size_creates_separate_line(self, cart):
        cart.add_item(product_id="prod-a", size="42", quantity=1)
        cart.add_item(product_id="prod-a", size="43", quantity=1)

        assert len(cart.items) == 2

    def test_add_raises_event_with_line_quantity(self, cart):
        cart.add_item(product_id="prod-a", size="42", quantity=1)
        cart.add_item(product_id="prod-a", size="42", quantity=2)

        event = cart._events[-1]
        assert isinstance(event, CartItemAdded)
        assert event.quantity == 2
        assert event.line_quantity == 3


class TestUpdateQuantity:
    def test_update_sets_new_quantity(self, cart):
        item, _ = cart.add_item(product_id="prod-a", size="42", quantity=1)
        cart.update_item_quantity(item.id, 4)

        assert cart.items[0].quantity == 4
        assert isinstance(cart._events[-1], CartQuantityUpdated)
        assert cart._events[-1].previous_quantity == 1

    def test_update_to_zero_is_rejected(self, cart):
        item, _ = cart.add_item(product_id="prod-a", size="42", quantity=1)

        with pytest.raises(ValidationError) as exc:
            cart.update_item_quantity(item.id, 0)
        assert "quantity" in exc.value.messages

    def test_update_unknown_item_raises_not_found(self, cart):
        with pytest.raises(ObjectNotFoundError):
            cart.update_item_quantity("missing-item", 2)


class TestRemoveItem:
    def test_remove_line(self, cart):
        item, _ = cart.add_item(product_id="prod-a", size="42", quantity=1)
        cart.remove_item(item.id)

        assert len(cart.items) == 0
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_remove_unknown_item_raises_not_found(self, cart):
        with pytest.raises(ObjectNotFoundError):
            cart.remove_item("missing-item")

    def test_drop_product_removes_every_size(self, cart):
        cart.add_item(product_id="prod-a", size="42", quantity=1)
        cart.add_item(product_id="prod-a", size="43", quantity=1)
        cart.add_item(product_id="prod-b", size="40", quantity=1)

        cart.drop_product("prod-a")

        assert [str(i.product_id) for i in cart.items] == ["prod-b"]


class TestClear:
    def test_clear_empties_cart(self, cart):
        cart.add_item(product_id="prod-a", size="42", quantity=1)
        cart.add_item(product_id="prod-b", size="40", quantity=2)

        cart.clear(order_id="order-001")

        assert len(cart.items) == 0
        event = cart._events[-1]
        assert isinstance(event, CartCleared)
        assert event.items_removed == 2
        assert str(event.order_id) == "order-001"
