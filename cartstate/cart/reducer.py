"""
Cart Reducer - the cart state machine.

Pure functions ``(CartState, payload) -> CartState``. They never mutate
their input, never raise for unknown ids or non-positive quantities, and
never log; a no-op returns the very same state object.

Aggregates are maintained incrementally from the *stored* unit price of
each line, so ``total_amount`` always equals the sum of line totals even
when an add payload carries a different price for an existing id.
"""

from typing import Any, Callable, Optional

from cartstate import money
from .actions import Action, ActionType
from .models import AddItemPayload, CartItem, CartState, ItemId, UpdateQuantityPayload


def _index_of(state: CartState, item_id: ItemId) -> int:
    for index, item in enumerate(state.items):
        if item.id == item_id:
            return index
    return -1


def _replace_at(items: tuple, index: int, item: CartItem) -> tuple:
    return items[:index] + (item,) + items[index + 1:]


def _drop_at(items: tuple, index: int) -> tuple:
    return items[:index] + items[index + 1:]


def _next_state(items: tuple, total_quantity: int, total_amount) -> CartState:
    return CartState(items=items, total_quantity=total_quantity, total_amount=total_amount)


def _without_line(state: CartState, index: int) -> CartState:
    item = state.items[index]
    return _next_state(
        _drop_at(state.items, index),
        state.total_quantity - item.quantity,
        money.subtract(state.total_amount, item.line_total),
    )


def add(state: CartState, payload: AddItemPayload) -> CartState:
    """Add one unit of ``payload.id``, appending a new line if it is not in the cart."""
    index = _index_of(state, payload.id)

    if index >= 0:
        # Existing line keeps its name, price and image
        existing = state.items[index]
        items = _replace_at(
            state.items, index, existing.model_copy(update={"quantity": existing.quantity + 1})
        )
        unit_price = existing.price
    else:
        new_item = CartItem(
            id=payload.id,
            name=payload.name,
            price=payload.price,
            quantity=1,
            image=payload.image or "",
        )
        items = state.items + (new_item,)
        unit_price = new_item.price

    return _next_state(items, state.total_quantity + 1, money.add(state.total_amount, unit_price))


def remove(state: CartState, item_id: ItemId) -> CartState:
    """Delete the line for ``item_id`` regardless of its quantity."""
    index = _index_of(state, item_id)
    if index < 0:
        return state
    return _without_line(state, index)


def set_quantity(state: CartState, item_id: ItemId, quantity: int) -> CartState:
    """Set the quantity of a line; ``quantity <= 0`` deletes it."""
    index = _index_of(state, item_id)
    if index < 0:
        return state

    if quantity <= 0:
        return _without_line(state, index)

    existing = state.items[index]
    diff = quantity - existing.quantity
    if diff == 0:
        return state

    return _next_state(
        _replace_at(state.items, index, existing.model_copy(update={"quantity": quantity})),
        state.total_quantity + diff,
        money.add(state.total_amount, money.multiply(existing.price, diff)),
    )


def decrement(state: CartState, item_id: ItemId) -> CartState:
    """Take one unit off a line; the last unit deletes it."""
    index = _index_of(state, item_id)
    if index < 0:
        return state

    existing = state.items[index]
    if existing.quantity == 1:
        return _without_line(state, index)

    return _next_state(
        _replace_at(state.items, index, existing.model_copy(update={"quantity": existing.quantity - 1})),
        state.total_quantity - 1,
        money.subtract(state.total_amount, existing.price),
    )


def clear(state: CartState) -> CartState:
    """Return the empty cart."""
    if state.is_empty and state.total_quantity == 0 and state.total_amount == 0:
        return state
    return CartState.empty()


def _on_add(state: CartState, payload: AddItemPayload) -> CartState:
    return add(state, payload)


def _on_update(state: CartState, payload: UpdateQuantityPayload) -> CartState:
    return set_quantity(state, payload.id, payload.quantity)


def _on_clear(state: CartState, payload: None) -> CartState:
    return clear(state)


_HANDLERS: dict[ActionType, Callable[[CartState, Any], CartState]] = {
    ActionType.ADD_ITEM: _on_add,
    ActionType.REMOVE_ITEM: remove,
    ActionType.UPDATE_QUANTITY: _on_update,
    ActionType.DECREMENT_ITEM: decrement,
    ActionType.CLEAR_CART: _on_clear,
}


def cart_reducer(state: Optional[CartState], action: Action) -> CartState:
    """
    Reduce one action into the next cart state.

    ``state=None`` starts from the empty cart. Actions of any other kind
    (e.g. meant for another slice of a combined store) leave the state as is.
    """
    if state is None:
        state = CartState.empty()

    if not isinstance(action, Action):
        return state
    handler = _HANDLERS.get(action.type)
    if handler is None:
        return state
    return handler(state, action.payload)
