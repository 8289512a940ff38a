"""
cartstate - shopping-cart state container

This package contains:
- cart: models, actions, the cart reducer and selectors
- store: the store host (dispatch / subscribe)
- money: Decimal helpers
- config, logging, errors: ambient settings and diagnostics

Note: Imports are lazy so that importing a submodule does not pull in the
whole package.
"""

__all__ = [
    "CartItem",
    "CartState",
    "Action",
    "ActionType",
    "cart_reducer",
    "Store",
    "configure_store",
    "create_cart_store",
]

_LAZY = {
    "CartItem": "cartstate.cart.models",
    "CartState": "cartstate.cart.models",
    "Action": "cartstate.cart.actions",
    "ActionType": "cartstate.cart.actions",
    "cart_reducer": "cartstate.cart.reducer",
    "Store": "cartstate.store",
    "configure_store": "cartstate.store",
    "create_cart_store": "cartstate.store",
}


def __getattr__(name):
    """Lazy attribute access for the public API."""
    module_name = _LAZY.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    import importlib
    return getattr(importlib.import_module(module_name), name)
