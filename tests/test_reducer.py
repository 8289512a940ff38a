"""
Tests for the cart reducer
"""

import random
from decimal import Decimal

import pytest

from cartstate.cart import (
    AddItemPayload,
    CartState,
    add_item,
    cart_reducer,
    clear_cart,
    decrease_quantity,
    remove_item,
    update_quantity,
)
from cartstate.cart import reducer


def assert_invariant(state: CartState):
    """Aggregates match the lines and no line is empty."""
    assert state.total_quantity == sum(item.quantity for item in state.items)
    assert state.total_amount == sum((item.line_total for item in state.items), Decimal("0"))
    assert all(item.quantity > 0 for item in state.items)
    assert len({item.id for item in state.items}) == len(state.items)


def summary(state: CartState):
    return [(item.id, item.quantity) for item in state.items], state.total_quantity, state.total_amount


class TestScenarios:
    """The documented action sequences."""

    def test_add_to_empty(self, empty_cart, payload_a):
        """Scenario 1: first add creates a line with quantity 1."""
        state = reducer.add(empty_cart, payload_a)

        assert summary(state) == ([(1, 1)], 1, 10)
        assert state.items[0].name == "A"
        assert state.items[0].image == ""

    def test_add_same_item_again(self, empty_cart, payload_a):
        """Scenario 2: adding the same id increments its quantity."""
        state = reducer.add(reducer.add(empty_cart, payload_a), payload_a)

        assert summary(state) == ([(1, 2)], 2, 20)

    def test_set_quantity(self, empty_cart, payload_a):
        """Scenario 3: set quantity to 5."""
        state = reducer.add(reducer.add(empty_cart, payload_a), payload_a)
        state = reducer.set_quantity(state, 1, 5)

        assert summary(state) == ([(1, 5)], 5, 50)

    def test_set_quantity_zero_removes(self, empty_cart, payload_a):
        """Scenario 4: set quantity to 0 deletes the line."""
        state = reducer.set_quantity(reducer.add(empty_cart, payload_a), 1, 5)
        state = reducer.set_quantity(state, 1, 0)

        assert summary(state) == ([], 0, 0)
        assert state == CartState.empty()

    def test_clear_two_items(self, empty_cart, payload_a, payload_b):
        """Scenario 5: clear after adding two distinct items."""
        state = reducer.add(reducer.add(empty_cart, payload_a), payload_b)

        assert summary(state) == ([(1, 1), (2, 1)], 2, 15)
        assert reducer.clear(state) == CartState.empty()


class TestAdd:
    """Tests for add."""

    def test_insertion_order_preserved(self, cart_ab, payload_a):
        """Test updating a line keeps its position."""
        state = reducer.add(cart_ab, payload_a)

        assert [item.id for item in state.items] == [1, 2]
        assert state.items[0].quantity == 3

    def test_image_passthrough(self, empty_cart, payload_b):
        """Test the image is stored as given."""
        state = reducer.add(empty_cart, payload_b)

        assert state.items[0].image == "b.png"

    def test_existing_line_keeps_stored_price(self, empty_cart, payload_a):
        """Test a different price for an existing id changes only the quantity."""
        state = reducer.add(empty_cart, payload_a)
        state = reducer.add(state, AddItemPayload(id=1, name="Renamed", price=99))

        assert state.items[0].price == Decimal("10")
        assert state.items[0].name == "A"
        assert state.total_amount == Decimal("20")
        assert_invariant(state)

    def test_does_not_mutate_input(self, cart_ab, payload_a):
        """Test the previous state is left untouched."""
        before = cart_ab.to_dict()

        after = reducer.add(cart_ab, payload_a)

        assert cart_ab.to_dict() == before
        assert after is not cart_ab
        assert after.items[1] is cart_ab.items[1]

    def test_fractional_prices_are_exact(self, empty_cart):
        """Test Decimal bookkeeping avoids float drift."""
        state = empty_cart
        for _ in range(3):
            state = reducer.add(state, AddItemPayload(id="c", name="C", price=0.1))

        assert state.total_amount == Decimal("0.3")


class TestRemove:
    """Tests for remove."""

    def test_remove_whole_line(self, cart_ab):
        """Test removing deletes the line regardless of quantity."""
        state = reducer.remove(cart_ab, 1)

        assert summary(state) == ([(2, 1)], 1, 5)

    def test_remove_missing_is_noop(self, cart_ab):
        """Test removing an unknown id returns the same state."""
        assert reducer.remove(cart_ab, 42) is cart_ab
        assert reducer.remove(cart_ab, "1") is cart_ab

    def test_remove_from_empty(self, empty_cart):
        """Test removing from an empty cart."""
        assert reducer.remove(empty_cart, 1) is empty_cart


class TestSetQuantity:
    """Tests for set_quantity."""

    def test_decrease_via_set(self, cart_ab):
        """Test lowering a quantity."""
        state = reducer.set_quantity(cart_ab, 1, 1)

        assert summary(state) == ([(1, 1), (2, 1)], 2, 15)

    def test_negative_removes(self, cart_ab):
        """Test a negative quantity deletes the line."""
        state = reducer.set_quantity(cart_ab, 2, -3)

        assert summary(state) == ([(1, 2)], 2, 20)

    def test_missing_is_noop(self, cart_ab):
        """Test an unknown id is ignored, even with quantity <= 0."""
        assert reducer.set_quantity(cart_ab, 99, 4) is cart_ab
        assert reducer.set_quantity(cart_ab, 99, 0) is cart_ab

    def test_same_quantity_is_noop(self, cart_ab):
        """Test setting the current quantity returns the same state."""
        assert reducer.set_quantity(cart_ab, 1, 2) is cart_ab

    def test_order_preserved(self, cart_ab):
        """Test the updated line stays in place."""
        state = reducer.set_quantity(cart_ab, 1, 7)

        assert [item.id for item in state.items] == [1, 2]


class TestDecrement:
    """Tests for decrement."""

    def test_decrement(self, cart_ab):
        """Test taking one unit off a line."""
        state = reducer.decrement(cart_ab, 1)

        assert summary(state) == ([(1, 1), (2, 1)], 2, 15)

    def test_decrement_last_unit_removes(self, cart_ab):
        """Test the last unit deletes the line."""
        state = reducer.decrement(cart_ab, 2)

        assert summary(state) == ([(1, 2)], 2, 20)

    def test_missing_is_noop(self, cart_ab):
        """Test an unknown id is ignored."""
        assert reducer.decrement(cart_ab, 3) is cart_ab

    def test_add_then_decrement_round_trip(self, cart_ab):
        """Test add followed by decrement restores the previous state."""
        new_item = AddItemPayload(id=3, name="C", price="7.25")

        assert reducer.decrement(reducer.add(cart_ab, new_item), 3) == cart_ab
        assert reducer.decrement(reducer.add(CartState.empty(), new_item), 3) == CartState.empty()


class TestClear:
    """Tests for clear."""

    def test_clear_is_idempotent(self, cart_ab):
        """Test clearing twice equals clearing once."""
        once = reducer.clear(cart_ab)

        assert reducer.clear(once) == once == CartState.empty()

    def test_clear_empty_returns_same(self, empty_cart):
        """Test clearing an empty cart is a no-op."""
        assert reducer.clear(empty_cart) is empty_cart


class TestCartReducer:
    """Tests for action dispatch through cart_reducer."""

    def test_none_state_is_empty(self):
        """Test the reducer supplies the initial state."""
        assert cart_reducer(None, clear_cart()) == CartState.empty()

    def test_unknown_action_returns_state(self, cart_ab):
        """Test foreign actions leave the state alone."""
        assert cart_reducer(cart_ab, {"type": "cart/addItem"}) is cart_ab
        assert cart_reducer(cart_ab, object()) is cart_ab

    def test_full_sequence(self):
        """Test every action kind through the reducer."""
        state = cart_reducer(None, add_item(id=1, name="A", price=10))
        state = cart_reducer(state, add_item(id=2, name="B", price=5))
        state = cart_reducer(state, add_item({"id": 1, "name": "A", "price": 10}))
        state = cart_reducer(state, update_quantity(2, 4))
        state = cart_reducer(state, decrease_quantity(1))

        assert summary(state) == ([(1, 1), (2, 4)], 5, 30)

        state = cart_reducer(state, remove_item(2))
        assert summary(state) == ([(1, 1)], 1, 10)

        state = cart_reducer(state, clear_cart())
        assert state == CartState.empty()

    def test_readd_existing_line(self, cart_ab):
        """Test the "+" button path: re-adding a CartItem."""
        state = cart_reducer(cart_ab, add_item(cart_ab.items[1]))

        assert state.find(2).quantity == 2
        assert state.total_amount == Decimal("30")


class TestInvariant:
    """Random action sequences keep the aggregates consistent."""

    @pytest.mark.parametrize("seed", range(10))
    def test_random_sequences(self, seed):
        """Test the invariant after every step of a random run."""
        rng = random.Random(seed)
        catalog = [
            {"id": i, "name": f"P{i}", "price": rng.choice([0, 0.1, 1.99, 5, 12.5, "3.33"])}
            for i in range(5)
        ]
        state = cart_reducer(None, clear_cart())

        for _ in range(200):
            roll = rng.random()
            product = rng.choice(catalog)
            if roll < 0.45:
                action = add_item(product)
            elif roll < 0.6:
                action = remove_item(product["id"])
            elif roll < 0.8:
                action = update_quantity(product["id"], rng.randint(-2, 6))
            elif roll < 0.97:
                action = decrease_quantity(product["id"])
            else:
                action = clear_cart()

            previous = state.to_dict()
            next_state = cart_reducer(state, action)

            assert state.to_dict() == previous
            assert_invariant(next_state)
            state = next_state
