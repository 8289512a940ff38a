"""
Cart Actions - tagged requests consumed by the cart reducer.

Action creators build validated ``Action`` values; ``parse_action`` is the
boundary for raw ``{"type": ..., "payload": ...}`` mappings coming from UI
code and is the only place in the cart package that raises.
"""

import math
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, ValidationInfo, field_validator

from cartstate.errors import (
    CartActionError,
    ERROR_INVALID_ACTION,
    ERROR_INVALID_PAYLOAD,
    ERROR_UNKNOWN_ACTION,
)
from .models import AddItemPayload, CartItem, ItemId, UpdateQuantityPayload


class ActionType(str, Enum):
    """The five cart action kinds."""
    ADD_ITEM = "cart/addItem"
    REMOVE_ITEM = "cart/removeItem"
    UPDATE_QUANTITY = "cart/updateQuantity"
    DECREMENT_ITEM = "cart/decreaseQuantity"
    CLEAR_CART = "cart/clearCart"


_ITEM_ID = TypeAdapter(ItemId)

_PAYLOAD_ADAPTERS = {
    ActionType.ADD_ITEM: TypeAdapter(AddItemPayload),
    ActionType.REMOVE_ITEM: _ITEM_ID,
    ActionType.UPDATE_QUANTITY: TypeAdapter(UpdateQuantityPayload),
    ActionType.DECREMENT_ITEM: _ITEM_ID,
}

# Short names accepted by parse_action besides the enum names and values
_TYPE_ALIASES = {
    "addItem": ActionType.ADD_ITEM,
    "removeItem": ActionType.REMOVE_ITEM,
    "updateQuantity": ActionType.UPDATE_QUANTITY,
    "decreaseQuantity": ActionType.DECREMENT_ITEM,
    "clearCart": ActionType.CLEAR_CART,
}


class Action(BaseModel):
    """A cart action: a type tag plus its validated payload."""
    model_config = ConfigDict(frozen=True)

    type: ActionType
    payload: Any = None

    @field_validator("payload", mode="before")
    @classmethod
    def validate_payload(cls, v, info: ValidationInfo):
        action_type = info.data.get("type")
        if action_type is None:
            # type already failed validation
            return v
        if action_type is ActionType.CLEAR_CART:
            return None
        if isinstance(v, CartItem):
            v = v.model_dump()
        return _PAYLOAD_ADAPTERS[action_type].validate_python(v)


def add_item(
    item: Union[Mapping, CartItem, AddItemPayload, None] = None,
    **fields: Any,
) -> Action:
    """
    Build an ADD_ITEM action.

    Accepts a mapping, an existing ``CartItem`` (the "+" button re-adds the
    line it shows) or keyword fields ``id``, ``name``, ``price``, ``image``.
    """
    if item is None:
        item = fields
    return Action(type=ActionType.ADD_ITEM, payload=item)


def remove_item(item_id: ItemId) -> Action:
    """Build a REMOVE_ITEM action."""
    return Action(type=ActionType.REMOVE_ITEM, payload=item_id)


def update_quantity(item_id: ItemId, quantity: int) -> Action:
    """Build an UPDATE_QUANTITY action."""
    return Action(
        type=ActionType.UPDATE_QUANTITY,
        payload={"id": item_id, "quantity": quantity},
    )


def decrease_quantity(item_id: ItemId) -> Action:
    """Build a DECREMENT_ITEM action."""
    return Action(type=ActionType.DECREMENT_ITEM, payload=item_id)


def clear_cart() -> Action:
    """Build a CLEAR_CART action."""
    return Action(type=ActionType.CLEAR_CART)


def _resolve_type(raw_type: Any) -> ActionType:
    if isinstance(raw_type, ActionType):
        return raw_type
    if isinstance(raw_type, str):
        if raw_type in _TYPE_ALIASES:
            return _TYPE_ALIASES[raw_type]
        if raw_type in ActionType.__members__:
            return ActionType[raw_type]
        try:
            return ActionType(raw_type)
        except ValueError:
            pass
    raise CartActionError(f"{ERROR_UNKNOWN_ACTION}: {raw_type!r}")


def parse_action(raw: Union[Action, Mapping]) -> Action:
    """
    Turn a raw ``{"type": ..., "payload": ...}`` mapping into an ``Action``.

    ``type`` may be the enum value (``"cart/addItem"``), the enum name
    (``"ADD_ITEM"``) or the short creator name (``"addItem"``).

    Raises:
        CartActionError: unknown type or malformed payload
    """
    if isinstance(raw, Action):
        return raw
    if not isinstance(raw, Mapping) or "type" not in raw:
        raise CartActionError(ERROR_INVALID_ACTION)

    action_type = _resolve_type(raw["type"])
    try:
        return Action(type=action_type, payload=raw.get("payload"))
    except ValidationError as e:
        raise CartActionError(f"{ERROR_INVALID_PAYLOAD} for {action_type.value}: {e}") from e


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_quantity_input(raw: Any) -> Optional[int]:
    """
    Parse a quantity typed by the user.

    Reads the leading integer of a string ("3 pcs" -> 3) and truncates
    finite floats. Returns None for non-numeric or negative input so the
    caller can skip the dispatch; 0 is returned as-is (it removes the line).
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return None
        value = int(raw)
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if match is None:
            return None
        value = int(match.group(1))
    else:
        return None
    return value if value >= 0 else None
