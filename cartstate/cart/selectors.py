"""Read helpers for UI code observing the store."""
from decimal import Decimal
from typing import Mapping, Optional, Union

from .models import CartItem, CartState, ItemId

RootState = Union[Mapping, CartState]

CART_SLICE = "cart"


def select_cart(root: RootState) -> CartState:
    """The cart slice of a root state (a bare CartState is returned as-is)."""
    if isinstance(root, CartState):
        return root
    return root[CART_SLICE]


def select_items(root: RootState) -> tuple[CartItem, ...]:
    return select_cart(root).items


def select_total_quantity(root: RootState) -> int:
    return select_cart(root).total_quantity


def select_total_amount(root: RootState) -> Decimal:
    return select_cart(root).total_amount


def select_item(root: RootState, item_id: ItemId) -> Optional[CartItem]:
    return select_cart(root).find(item_id)


def select_is_empty(root: RootState) -> bool:
    return select_cart(root).is_empty
