"""
Store Host - holds the current state and serializes dispatch.

Usage:
    store = create_cart_store()
    unsubscribe = store.subscribe(lambda: render(store.get_state()))
    store.dispatch(add_item(id=1, name="A", price=10))

There is no module-level store; create one and pass it to consumers.
"""

import threading
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Optional, Union

from cartstate.cart.actions import parse_action
from cartstate.cart.models import CartState
from cartstate.cart.reducer import cart_reducer
from cartstate.cart.selectors import CART_SLICE
from cartstate.errors import CartStoreError, ERROR_LISTENER_NOT_CALLABLE, ERROR_REENTRANT_DISPATCH
from cartstate.logging import get_logger, sanitize_id_for_logging

logger = get_logger(__name__)

Reducer = Callable[[Any, Any], Any]
Listener = Callable[[], None]


@dataclass(frozen=True)
class InitAction:
    """Dispatched once when a store is created so reducers can supply their initial state."""
    type: str = "@@cartstate/INIT"
    payload: None = None


def _describe(action: Any) -> str:
    """Action type plus the item id it targets, safe for logs."""
    action_type = getattr(action, "type", action)
    action_type = getattr(action_type, "value", action_type)
    payload = getattr(action, "payload", None)
    item_id = getattr(payload, "id", payload)
    if item_id is None:
        return str(action_type)
    return f"{action_type} (item {sanitize_id_for_logging(item_id)})"


class Store:
    """
    Single-writer state container.

    Dispatches are serialized; listeners run after each transition, outside
    the lock, in subscription order, and may dispatch again.
    """

    def __init__(self, reducer: Reducer, initial_state: Any = None):
        self._reducer = reducer
        self._lock = threading.RLock()
        self._dispatching = False
        self._listeners: list[Listener] = []
        self._state = reducer(initial_state, InitAction())

    def get_state(self) -> Any:
        """Current state value."""
        return self._state

    def dispatch(self, action: Union[Mapping, Any]) -> Any:
        """
        Run ``action`` through the reducer and notify listeners.

        Raw mappings are parsed with ``parse_action`` first.

        Returns:
            The dispatched action

        Raises:
            CartActionError: raw mapping is not a valid cart action
            CartStoreError: dispatch called from inside the reducer
        """
        if isinstance(action, Mapping):
            action = parse_action(action)

        with self._lock:
            if self._dispatching:
                raise CartStoreError(ERROR_REENTRANT_DISPATCH)
            self._dispatching = True
            try:
                self._state = self._reducer(self._state, action)
            finally:
                self._dispatching = False
            listeners = tuple(self._listeners)

        logger.debug(
            f"Dispatched {_describe(action)} to {len(listeners)} listener(s)"
        )

        for listener in listeners:
            listener()
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register ``listener`` to be called after every dispatch.

        Returns:
            Callable that removes the listener; calling it twice is harmless
        """
        if not callable(listener):
            raise CartStoreError(ERROR_LISTENER_NOT_CALLABLE)

        with self._lock:
            self._listeners.append(listener)
        logger.debug(f"Listener subscribed ({len(self._listeners)} total)")

        subscribed = True

        def unsubscribe() -> None:
            nonlocal subscribed
            if not subscribed:
                return
            subscribed = False
            with self._lock:
                self._listeners.remove(listener)
            logger.debug(f"Listener unsubscribed ({len(self._listeners)} total)")

        return unsubscribe


def combine_reducers(reducers: Mapping[str, Reducer]) -> Reducer:
    """
    Build a root reducer over a mapping of slice reducers.

    The root state is a read-only mapping keyed like ``reducers``; the same
    object is returned when no slice changed.
    """
    reducers = dict(reducers)

    def combination(state: Optional[Mapping], action: Any) -> Mapping:
        state = state if state is not None else MappingProxyType({})
        next_state = {}
        changed = len(state) != len(reducers)
        for key, reducer in reducers.items():
            previous = state.get(key)
            next_state[key] = reducer(previous, action)
            changed = changed or next_state[key] is not previous
        return MappingProxyType(next_state) if changed else state

    return combination


def configure_store(
    reducer: Union[Reducer, Mapping[str, Reducer]],
    preloaded_state: Any = None,
) -> Store:
    """Create a store from a reducer or a mapping of slice reducers."""
    if isinstance(reducer, Mapping):
        reducer = combine_reducers(reducer)
        if preloaded_state is not None:
            preloaded_state = MappingProxyType(dict(preloaded_state))
    return Store(reducer, preloaded_state)


def create_cart_store(preloaded_cart: Optional[CartState] = None) -> Store:
    """Create a store with a single ``cart`` slice."""
    preloaded = {CART_SLICE: preloaded_cart} if preloaded_cart is not None else None
    return configure_store({CART_SLICE: cart_reducer}, preloaded)
