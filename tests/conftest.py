"""Pytest configuration and fixtures"""
import os
import pytest

# Keep test output quiet unless asked otherwise
os.environ.setdefault("LOG_LEVEL", "WARNING")

from cartstate.cart import AddItemPayload, CartState, add_item
from cartstate.cart import reducer
from cartstate.store import create_cart_store


@pytest.fixture
def empty_cart():
    """Empty cart state"""
    return CartState.empty()


@pytest.fixture
def payload_a():
    """Add payload for product A"""
    return AddItemPayload(id=1, name="A", price=10)


@pytest.fixture
def payload_b():
    """Add payload for product B"""
    return AddItemPayload(id=2, name="B", price=5, image="b.png")


@pytest.fixture
def cart_ab(empty_cart, payload_a, payload_b):
    """Cart with two units of A and one of B"""
    state = reducer.add(empty_cart, payload_a)
    state = reducer.add(state, payload_a)
    return reducer.add(state, payload_b)


@pytest.fixture
def store():
    """Fresh cart store"""
    return create_cart_store()


@pytest.fixture
def sample_item_dict():
    """Raw item data as UI code sends it"""
    return {
        "id": "sku-123",
        "name": "Coffee Mug",
        "price": 12.5,
        "image": "https://example.com/mug.png",
    }


@pytest.fixture
def add_mug(sample_item_dict):
    """ADD_ITEM action for the sample item"""
    return add_item(sample_item_dict)
