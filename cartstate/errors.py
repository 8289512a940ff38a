"""
Common Error Constants and Exceptions

The reducer is total and never raises; these are used only at the
action-parsing boundary and by the store host.
"""

# Action parsing errors
ERROR_UNKNOWN_ACTION = "Unknown cart action"
ERROR_INVALID_ACTION = "Action must be a mapping with a 'type' key"
ERROR_INVALID_PAYLOAD = "Invalid action payload"

# Store errors
ERROR_REENTRANT_DISPATCH = "Reducers may not dispatch actions"
ERROR_LISTENER_NOT_CALLABLE = "Listener must be callable"


class CartError(Exception):
    """Base class for cartstate errors."""


class CartActionError(CartError, ValueError):
    """Raised when raw input cannot be turned into a cart action."""


class CartStoreError(CartError, RuntimeError):
    """Raised when the store host is misused."""
