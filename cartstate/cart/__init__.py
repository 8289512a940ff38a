"""Cart package: models, actions, reducer and selectors."""
from .models import CartItem, CartState, AddItemPayload, UpdateQuantityPayload, ItemId
from .actions import (
    Action,
    ActionType,
    add_item,
    remove_item,
    update_quantity,
    decrease_quantity,
    clear_cart,
    parse_action,
    parse_quantity_input,
)
from .reducer import cart_reducer
from . import reducer, selectors

__all__ = [
    "CartItem",
    "CartState",
    "AddItemPayload",
    "UpdateQuantityPayload",
    "ItemId",
    "Action",
    "ActionType",
    "add_item",
    "remove_item",
    "update_quantity",
    "decrease_quantity",
    "clear_cart",
    "parse_action",
    "parse_quantity_input",
    "cart_reducer",
    "reducer",
    "selectors",
]
